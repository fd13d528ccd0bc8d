import datetime

from aws_cdk import Duration
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_lambda as _lambda
from aws_cdk import aws_secretsmanager as secretsmanager
from constructs import Construct


class Functions(Construct):
    """Lambda 関数を管理する Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        table: dynamodb.Table,
        common_layer: _lambda.LayerVersion,
        token_secret: secretsmanager.ISecret,
    ) -> None:
        super().__init__(scope, id)
        self._table = table
        self._common_layer = common_layer
        self._token_secret = token_secret

        self.hotel_api = self._create_function(
            "HotelApiLambda",
            "services.hotel.handlers.api.lambda_handler",
            "hotel-service",
        )
        self.room_api = self._create_function(
            "RoomApiLambda",
            "services.room.handlers.api.lambda_handler",
            "room-service",
        )
        self.reservation_api = self._create_function(
            "ReservationApiLambda",
            "services.reservation.handlers.api.lambda_handler",
            "reservation-service",
        )
        self.user_api = self._create_function(
            "UserApiLambda",
            "services.user.handlers.api.lambda_handler",
            "user-service",
        )
        self.login = self._create_function(
            "LoginLambda",
            "services.auth.handlers.login.lambda_handler",
            "auth-service",
        )
        self.authorizer = self._create_function(
            "TokenAuthorizerLambda",
            "authorizer.handler.lambda_handler",
            "auth-service",
        )

        for fn in [
            self.hotel_api,
            self.room_api,
            self.reservation_api,
            self.user_api,
        ]:
            table.grant_read_write_data(fn)

        table.grant_read_data(self.login)
        token_secret.grant_read(self.login)
        token_secret.grant_read(self.authorizer)

    def _create_function(
        self,
        id: str,
        handler: str,
        service_name: str,
    ) -> _lambda.Function:
        return _lambda.Function(
            self,
            id,
            runtime=_lambda.Runtime.PYTHON_3_14,
            handler=handler,
            code=_lambda.Code.from_asset("src"),
            layers=[self._common_layer],
            timeout=Duration.seconds(10),
            environment={
                "TABLE_NAME": self._table.table_name,
                "TOKEN_SECRET_ARN": self._token_secret.secret_arn,
                "POWERTOOLS_SERVICE_NAME": service_name,
                "DEPLOY_TIME": datetime.datetime.now(datetime.timezone.utc).isoformat(),
            },
        )
