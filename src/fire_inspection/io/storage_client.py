"""Object storage client for vehicle photographs and report bundles."""

import boto3
from pathlib import Path
from botocore.exceptions import BotoCoreError, ClientError

from ..config import settings
from ..utils.logger import get_logger
from ..utils.exceptions import StorageDeleteError, StorageDownloadError, StorageUploadError

logger = get_logger(__name__)


class StorageClient:
    """
    Abstraction over the S3-compatible storage endpoint.

    Supabase Storage exposes buckets through the S3 protocol, so photographs
    are written with boto3 and read back through their public URLs.
    """

    def __init__(
        self,
        bucket: str | None = None,
        public_base_url: str | None = None,
        s3_client=None,
    ):
        """
        Initialize storage client.

        Args:
            bucket: Bucket holding vehicle photographs (defaults to settings.images_bucket)
            public_base_url: Base URL of the Supabase project (defaults to settings.supabase_url)
            s3_client: Preconfigured boto3 S3 client (built from settings when omitted)
        """
        self.bucket = bucket or settings.images_bucket
        self.public_base_url = (public_base_url or settings.supabase_url).rstrip("/")
        self.s3 = s3_client or boto3.client(
            "s3",
            endpoint_url=settings.storage_endpoint_url,
            region_name=settings.storage_region,
            aws_access_key_id=settings.storage_access_key_id,
            aws_secret_access_key=settings.storage_secret_access_key,
        )
        logger.info(f"Initialized storage client for bucket {self.bucket}")

    def public_url(self, path: str) -> str:
        """Public URL of an object in the photographs bucket."""
        return f"{self.public_base_url}/storage/v1/object/public/{self.bucket}/{path}"

    def upload_bytes(self, path: str, content: bytes, content_type: str = "image/jpeg") -> str:
        """
        Upload an in-memory file to the photographs bucket.

        Args:
            path: Object key
            content: File content
            content_type: MIME type stored with the object

        Returns:
            The object key

        Raises:
            StorageUploadError: If upload fails
        """
        size_kb = len(content) / 1_000
        logger.info(f"Uploading {path} ({size_kb:.1f} KB) to bucket {self.bucket}")

        try:
            self.s3.put_object(Bucket=self.bucket, Key=path, Body=content, ContentType=content_type)
            return path
        except (BotoCoreError, ClientError) as e:
            error_msg = f"Failed to upload {path} to bucket {self.bucket}: {e}"
            logger.error(error_msg)
            raise StorageUploadError(error_msg) from e

    def delete_objects(self, paths: list[str]) -> None:
        """
        Delete objects from the photographs bucket.

        Args:
            paths: Object keys to delete

        Raises:
            StorageDeleteError: If deletion fails
        """
        if not paths:
            return

        logger.info(f"Deleting {len(paths)} objects from bucket {self.bucket}")

        try:
            response = self.s3.delete_objects(
                Bucket=self.bucket,
                Delete={"Objects": [{"Key": path} for path in paths]},
            )
        except (BotoCoreError, ClientError) as e:
            error_msg = f"Failed to delete {paths} from bucket {self.bucket}: {e}"
            logger.error(error_msg)
            raise StorageDeleteError(error_msg) from e

        errors = response.get("Errors", [])
        if errors:
            error_msg = f"Failed to delete {len(errors)} objects from bucket {self.bucket}: {errors}"
            logger.error(error_msg)
            raise StorageDeleteError(error_msg)

    def download_file(self, path: str, local_path: Path) -> Path:
        """
        Download a photograph to a local file.

        Args:
            path: Object key
            local_path: Local path to save the file

        Returns:
            Path to downloaded file

        Raises:
            StorageDownloadError: If download fails
        """
        logger.info(f"Downloading {path} from bucket {self.bucket}")

        try:
            self.s3.download_file(Bucket=self.bucket, Key=path, Filename=str(local_path))
            return local_path
        except (BotoCoreError, ClientError) as e:
            error_msg = f"Failed to download {path} from bucket {self.bucket}: {e}"
            logger.error(error_msg)
            raise StorageDownloadError(error_msg) from e

    def upload_file(self, local_path: Path, key: str, bucket: str | None = None) -> str:
        """
        Upload any local file with a custom key.

        Args:
            local_path: Local path of the file to upload
            key: Object key to use
            bucket: Target bucket (defaults to settings.reports_bucket)

        Returns:
            URI of uploaded file

        Raises:
            StorageUploadError: If upload fails
        """
        bucket = bucket or settings.reports_bucket

        try:
            self.s3.upload_file(Filename=str(local_path), Bucket=bucket, Key=key)
            uri = f"s3://{bucket}/{key}"
            logger.info(f"Uploaded file to {uri}")
            return uri
        except (BotoCoreError, ClientError) as e:
            error_msg = f"Failed to upload to s3://{bucket}/{key}: {e}"
            logger.error(error_msg)
            raise StorageUploadError(error_msg) from e

    def upload_report_bundle(self, bundle_dir: Path, prefix: str) -> str:
        """
        Upload every file of a report directory under a common prefix.

        Args:
            bundle_dir: Directory containing report.md, summary files and photographs
            prefix: Key prefix in the reports bucket

        Returns:
            URI of the uploaded prefix

        Raises:
            StorageUploadError: If any upload fails
        """
        bucket = settings.reports_bucket
        logger.info(f"Uploading report bundle to s3://{bucket}/{prefix}")

        file_count = 0
        for file_path in sorted(bundle_dir.rglob("*")):
            if file_path.is_file():
                relative = file_path.relative_to(bundle_dir).as_posix()
                self.upload_file(file_path, f"{prefix}/{relative}", bucket)
                file_count += 1

        logger.info(f"Uploaded {file_count} files to report bundle")
        return f"s3://{bucket}/{prefix}"
