from aws_cdk import Duration
from aws_cdk import aws_apigateway as apigw
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

# (パス, メソッド, 認証の要否)
_HOTEL_ROUTES = (
    ("/hotels", "POST", True),
    ("/getHotelsById/{id}", "GET", True),
    ("/updateHotels/{id}", "PUT", True),
    ("/deleteHotels/{id}", "DELETE", True),
    ("/getAllHotels", "GET", True),
)
_ROOM_ROUTES = (
    ("/createRooms", "POST", True),
    ("/getRoomsById/{id}", "GET", True),
    ("/updateRooms/{id}", "PUT", True),
    ("/deleteRooms/{id}", "DELETE", True),
    ("/getAllRooms", "GET", True),
)
_RESERVATION_ROUTES = (
    ("/createReservations", "POST", True),
    ("/getReservationsById/{id}", "GET", True),
    ("/updateReservations/{id}", "PUT", True),
    ("/cancelReservations/{id}", "DELETE", True),
    ("/getAllReservations", "GET", True),
)
_USER_ROUTES = (
    ("/createUsers", "POST", False),
    ("/getUsersById/{id}", "GET", True),
    ("/updateUsers/{id}", "PUT", True),
    ("/deleteUsers/{id}", "DELETE", True),
    ("/getAllUsers", "GET", True),
)
_LOGIN_ROUTES = (("/login", "POST", False),)


class Api(Construct):
    """API Gateway Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        hotel_api: _lambda.Function,
        room_api: _lambda.Function,
        reservation_api: _lambda.Function,
        user_api: _lambda.Function,
        login: _lambda.Function,
        authorizer_fn: _lambda.Function,
    ) -> None:
        super().__init__(scope, id)

        self.rest_api = apigw.RestApi(
            self,
            "HotelRestApi",
            rest_api_name="Hotel Back Office API",
            deploy_options=apigw.StageOptions(
                stage_name="prod",
                throttling_burst_limit=10,
                throttling_rate_limit=5,
            ),
        )

        # Authorization ヘッダーがなければ API Gateway が 401、
        # Deny ポリシーが返れば 403 を応答する
        self.authorizer = apigw.TokenAuthorizer(
            self,
            "JwtTokenAuthorizer",
            handler=authorizer_fn,
            identity_source=apigw.IdentitySource.header("Authorization"),
            results_cache_ttl=Duration.seconds(300),
        )

        for fn, routes in [
            (hotel_api, _HOTEL_ROUTES),
            (room_api, _ROOM_ROUTES),
            (reservation_api, _RESERVATION_ROUTES),
            (user_api, _USER_ROUTES),
            (login, _LOGIN_ROUTES),
        ]:
            integration = apigw.LambdaIntegration(fn)
            for path, method, secured in routes:
                resource = self.rest_api.root.resource_for_path(path)
                resource.add_method(
                    method,
                    integration,
                    authorizer=self.authorizer if secured else None,
                )
