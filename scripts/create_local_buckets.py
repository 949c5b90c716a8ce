#!/usr/bin/env python3
"""Create S3 buckets for local development.

This script creates the data and uploads buckets against a local S3
endpoint (LocalStack or MinIO), matching the buckets declared in the SAM
template.

Usage:
    STORAGE_BACKEND=s3 S3_ENDPOINT=http://localhost:4566 python scripts/create_local_buckets.py
"""

import sys
from pathlib import Path

import boto3
from botocore.exceptions import ClientError
from dotenv import load_dotenv

# Add src to path for config import
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import get_config


def create_bucket(s3, name: str, region: str) -> None:
    """Create one bucket, treating an existing one as success."""
    kwargs = {"Bucket": name}
    if region != "us-east-1":
        kwargs["CreateBucketConfiguration"] = {"LocationConstraint": region}
    try:
        s3.create_bucket(**kwargs)
        print(f"✓ Created bucket {name}")
    except ClientError as e:
        if e.response["Error"]["Code"] in ("BucketAlreadyOwnedByYou", "BucketAlreadyExists"):
            print(f"✓ Bucket {name} already exists")
        else:
            raise


def main():
    """Create both buckets."""
    load_dotenv()
    config = get_config()

    endpoint_url = config.s3_endpoint or "http://localhost:4566"
    data_bucket = config.data_bucket or "camper-calendar-data"
    uploads_bucket = config.uploads_bucket or "camper-calendar-uploads"

    print(f"Creating S3 buckets at {endpoint_url}...")
    print()

    # Local S3 emulators accept any credentials
    s3 = boto3.client(
        "s3",
        endpoint_url=endpoint_url,
        region_name=config.aws_region,
        aws_access_key_id="dummy",
        aws_secret_access_key="dummy",
    )

    create_bucket(s3, data_bucket, config.aws_region)
    create_bucket(s3, uploads_bucket, config.aws_region)

    print()
    print("✅ All S3 buckets ready")


if __name__ == "__main__":
    main()
