"""Pipeline exceptions."""


class PipelineError(Exception):
    """Fatal failure of a stage invocation."""


class BlobNotFoundError(PipelineError):
    """Requested object does not exist in the blob store."""

    def __init__(self, bucket: str, name: str) -> None:
        super().__init__(f"Object not found: {bucket}/{name}")
        self.bucket = bucket
        self.name = name


class InvalidEventError(ValueError):
    """Storage notification payload is malformed."""
