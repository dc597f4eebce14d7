from constructs import Construct
from aws_cdk import (
    Duration,
    RemovalPolicy,
    aws_lambda as _lambda,
    aws_s3 as s3,
)

RUNTIME_MAP = {
    "python3.13": _lambda.Runtime.PYTHON_3_13,
    "python3.12": _lambda.Runtime.PYTHON_3_12,
    "python3.11": _lambda.Runtime.PYTHON_3_11,
    "python3.10": _lambda.Runtime.PYTHON_3_10,
}


class BackendConstruct(Construct):
    """Items bucket plus the Lambda function that proxies /items to it."""

    def __init__(self, scope: Construct, id: str, *, cfg: dict) -> None:
        super().__init__(scope, id)

        self.bucket_cfg = cfg.get("bucket", {}) or {}
        self.lambda_cfg = cfg.get("lambda", {}) or {}

        self.bucket = self._create_items_bucket()
        self.func = self._create_api_lambda()

        # read/write on the bucket covers list, put and delete
        self.bucket.grant_read_write(self.func)

    def _resolve_runtime(self) -> _lambda.Runtime:
        """Resolve Lambda runtime from configuration."""
        cfg_runtime = (self.lambda_cfg.get("runtime") or "python3.12").lower()
        runtime_enum = RUNTIME_MAP.get(cfg_runtime)
        if runtime_enum is None:
            raise ValueError(
                f"Unsupported runtime '{cfg_runtime}'. "
                f"Choose one of: {list(RUNTIME_MAP.keys())}"
            )
        return runtime_enum

    def _create_items_bucket(self) -> s3.Bucket:
        remove = bool(self.bucket_cfg.get("removeOnDestroy", True))
        return s3.Bucket(
            self, "ItemsBucket",
            bucket_name=self.bucket_cfg.get("name") or None,
            versioned=self.bucket_cfg.get("versioned", False),
            block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
            encryption=s3.BucketEncryption.S3_MANAGED,
            enforce_ssl=True,
            removal_policy=RemovalPolicy.DESTROY if remove else RemovalPolicy.RETAIN,
            auto_delete_objects=remove,
        )

    def _create_api_lambda(self) -> _lambda.Function:
        return _lambda.Function(
            self, "ApiLambda",
            function_name=self.lambda_cfg.get("functionName"),
            runtime=self._resolve_runtime(),
            handler=self.lambda_cfg.get("handler", "index.lambda_handler"),
            code=_lambda.Code.from_asset(
                self.lambda_cfg.get("codePath", "lambda_src/handler")
            ),
            timeout=Duration.seconds(self.lambda_cfg.get("timeout", 10)),
            memory_size=self.lambda_cfg.get("memory", 128),
            environment=self._build_environment_variables(),
        )

    def _build_environment_variables(self) -> dict[str, str]:
        return {
            "BUCKET_NAME": self.bucket.bucket_name,
            "LOG_LEVEL": str(self.lambda_cfg.get("logLevel", "INFO")),
            "PAGINATE_LISTING": str(self.lambda_cfg.get("paginateListing", True)).lower(),
        }
