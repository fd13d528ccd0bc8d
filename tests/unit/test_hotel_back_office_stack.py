import shutil

import aws_cdk as core
import aws_cdk.assertions as assertions
import pytest

from hotel_back_office_stack import HotelBackOfficeStack

pytestmark = pytest.mark.skipif(
    shutil.which("node") is None, reason="aws-cdk-lib requires Node.js"
)


@pytest.fixture(scope="module")
def template():
    # アセットのバンドリングは行わない
    app = core.App(context={"aws:cdk:bundling-stacks": []})
    stack = HotelBackOfficeStack(app, "HotelBackOfficeStack")
    return assertions.Template.from_stack(stack)


def test_single_table_with_gsi(template):
    template.resource_count_is("AWS::DynamoDB::Table", 1)
    template.has_resource_properties(
        "AWS::DynamoDB::Table",
        {
            "KeySchema": [
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            "GlobalSecondaryIndexes": [
                assertions.Match.object_like({"IndexName": "GSI1"})
            ],
        },
    )


def test_lambda_functions(template):
    template.resource_count_is("AWS::Lambda::Function", 6)
    template.has_resource_properties(
        "AWS::Lambda::Function",
        {"Handler": "services.reservation.handlers.api.lambda_handler"},
    )


def test_token_authorizer(template):
    template.resource_count_is("AWS::ApiGateway::Authorizer", 1)
    template.has_resource_properties(
        "AWS::ApiGateway::Authorizer",
        {"Type": "TOKEN", "IdentitySource": "method.request.header.Authorization"},
    )


def test_open_routes_have_no_authorizer(template):
    methods = template.find_resources("AWS::ApiGateway::Method")
    open_methods = [
        m for m in methods.values() if m["Properties"]["AuthorizationType"] == "NONE"
    ]

    assert len(methods) == 21
    assert len(open_methods) == 2


def test_signing_key_secret(template):
    template.has_resource_properties(
        "AWS::SecretsManager::Secret",
        {"Name": "/hotel-back-office/token-signing-key"},
    )
