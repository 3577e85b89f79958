from setuptools import setup, find_packages

setup(
    name="presign-ledger",
    version="0.1.0",
    packages=find_packages(),
    install_requires=[
        "boto3",
        "botocore",
        "tzdata",
    ],
    extras_require={
        "test": [
            "pytest",
            "moto[s3,dynamodb]>=5",
        ],
    },
    author="ecaa",
    description="Presigned URLs for uploaded S3 objects, tracked in DynamoDB and announced over SNS",
    python_requires='>=3.9',
)
