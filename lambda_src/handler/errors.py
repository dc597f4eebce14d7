class ConfigurationError(RuntimeError):
    """Required runtime configuration is missing; fails the whole invocation."""


class ValidationError(ValueError):
    """Request is missing a required parameter; answered with a 400."""


class StoreError(RuntimeError):
    """Any failure reported by the object store, regardless of kind."""

    def __init__(self, operation, bucket, key=None):
        target = f"s3://{bucket}/{key}" if key is not None else f"s3://{bucket}"
        super().__init__(f"{operation} failed for {target}")
        self.operation = operation
        self.bucket = bucket
        self.key = key
