from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from scifanor.config import get_settings
from scifanor.errors import TransientIOError


class ObjectStorage:
    """S3-compatible bucket storage returning public URLs for uploaded objects."""

    def __init__(self, client, public_base_url: str):
        self.client = client
        self.public_base_url = public_base_url.rstrip("/")

    def ensure_bucket_exists(self, bucket: str, region: str | None = None) -> None:
        try:
            self.client.head_bucket(Bucket=bucket)
            return
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            if code not in {"404", "NoSuchBucket", "NotFound"}:
                raise

        create_args = {"Bucket": bucket}
        if region and region != "us-east-1":
            create_args["CreateBucketConfiguration"] = {"LocationConstraint": region}
        self.client.create_bucket(**create_args)

    def upload_bytes(self, bucket: str, key: str, payload: bytes, content_type: str) -> str:
        try:
            self.client.put_object(
                Bucket=bucket,
                Key=key,
                Body=payload,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            raise TransientIOError(f"Upload to {bucket}/{key} failed: {exc}") from exc
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"


@lru_cache(maxsize=1)
def get_s3_client():
    settings = get_settings()
    endpoint = settings.s3_endpoint or None
    if settings.s3_provider == "aws":
        endpoint = None

    return boto3.client(
        "s3",
        endpoint_url=endpoint,
        region_name=settings.s3_region,
        aws_access_key_id=settings.s3_access_key_id,
        aws_secret_access_key=settings.s3_secret_access_key,
    )


def get_storage() -> ObjectStorage:
    settings = get_settings()
    return ObjectStorage(get_s3_client(), settings.public_media_base)
