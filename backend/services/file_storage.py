"""
Object storage for uploaded files

Uploads go to S3 under a per-company prefix. Without AWS credentials the
upload is simulated and a mock URL is returned, so development setups work
with no bucket.
"""
import logging
import re
from typing import Optional

import boto3
from botocore.config import Config
from starlette.concurrency import run_in_threadpool

from config import Settings, get_settings
from utils.datetime_utils import epoch_millis

logger = logging.getLogger(__name__)

UNSAFE_NAME_CHARS = re.compile(r'[\\/\x00-\x1f]')


def build_object_key(company_id: str, filename: str, timestamp_ms: Optional[int] = None) -> str:
    """
    Key for an uploaded file: company_<id>/<epoch ms>_<filename>

    Path separators in the client-supplied name are replaced so a file can
    never escape its company prefix.
    """
    safe_name = UNSAFE_NAME_CHARS.sub("_", filename or "upload")
    return f"company_{company_id}/{timestamp_ms or epoch_millis()}_{safe_name}"


class FileStorage:
    """S3 upload handler with a mock fallback"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._client = None

    @property
    def is_mock(self) -> bool:
        return not self.settings.storage_configured

    def _get_s3_client(self):
        """Get a properly configured S3 client."""
        if self._client is None:
            region = self.settings.aws_region
            self._client = boto3.client(
                's3',
                aws_access_key_id=self.settings.aws_access_key_id,
                aws_secret_access_key=self.settings.aws_secret_access_key,
                region_name=region,
                config=Config(signature_version='s3v4', region_name=region),
            )
        return self._client

    async def upload(self, key: str, body: bytes, content_type: Optional[str] = None) -> str:
        """
        Store `body` under `key` and return its public URL.

        Raises:
            botocore.exceptions.ClientError: if S3 rejects the upload
        """
        if self.is_mock:
            logger.info(f"[Mock S3] Uploading file: {key}")
            return f"{self.settings.mock_storage_base_url.rstrip('/')}/{key}"

        bucket = self.settings.aws_bucket_name
        client = self._get_s3_client()
        await run_in_threadpool(
            client.put_object,
            Bucket=bucket,
            Key=key,
            Body=body,
            ContentType=content_type or "application/octet-stream",
        )
        logger.info(f"Uploaded {len(body)} bytes to s3://{bucket}/{key}")
        return f"https://{bucket}.s3.amazonaws.com/{key}"
