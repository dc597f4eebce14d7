from constructs import Construct
from aws_cdk import Stack, CfnOutput
from aws_cdk import aws_apigatewayv2 as apigwv2
from aws_cdk.aws_apigatewayv2_integrations import HttpLambdaIntegration
from src.cdk_construct.backend_construct import BackendConstruct


class InfraStack(Stack):
    def __init__(self, scope: Construct, construct_id: str, *, cfg: dict, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        backend = BackendConstruct(self, "Backend", cfg=cfg)

        # One integration serves every route; the function does its own routing
        # so unknown paths get 404 and other /items methods get 405 from it.
        integration = HttpLambdaIntegration("ApiIntegration", backend.func)
        http_api = apigwv2.HttpApi(
            self,
            "HttpApi",
            default_integration=integration,
        )

        http_api.add_routes(
            path="/health",
            methods=[apigwv2.HttpMethod.GET],
            integration=integration,
        )
        http_api.add_routes(
            path="/items",
            methods=[apigwv2.HttpMethod.ANY],
            integration=integration,
        )

        # Outputs
        CfnOutput(self, "ApiUrlOut", value=http_api.api_endpoint)
        CfnOutput(self, "BucketNameOut", value=backend.bucket.bucket_name)
        CfnOutput(self, "LambdaNameOut", value=backend.func.function_name)
