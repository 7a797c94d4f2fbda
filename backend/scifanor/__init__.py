"""SciFanor plant catalog service."""
