from aws_cdk import CfnOutput, Stack
from aws_cdk import aws_secretsmanager as secretsmanager
from constructs import Construct

from infra.constructs import Api, Database, Functions, Layers


class HotelBackOfficeStack(Stack):
    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        database = Database(self, "Database")
        layers = Layers(self, "Layers")

        # アクセストークン (HS256) の署名鍵
        token_secret = secretsmanager.Secret(
            self,
            "TokenSigningSecret",
            secret_name="/hotel-back-office/token-signing-key",
            generate_secret_string=secretsmanager.SecretStringGenerator(
                exclude_punctuation=True,
                password_length=64,
            ),
        )

        fns = Functions(
            self,
            "Functions",
            table=database.table,
            common_layer=layers.common_layer,
            token_secret=token_secret,
        )

        api = Api(
            self,
            "Api",
            hotel_api=fns.hotel_api,
            room_api=fns.room_api,
            reservation_api=fns.reservation_api,
            user_api=fns.user_api,
            login=fns.login,
            authorizer_fn=fns.authorizer,
        )

        CfnOutput(self, "ApiUrl", value=api.rest_api.url)
