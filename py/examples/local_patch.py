from __future__ import annotations

import os
import uuid

import boto3

from ddbcodec_py import build_patch, from_item, from_items, to_item_with_hints


def _client():
    return boto3.client(
        "dynamodb",
        endpoint_url=os.environ.get("DYNAMODB_ENDPOINT", "http://localhost:8000"),
        region_name=os.environ.get("AWS_REGION", "us-east-1"),
        aws_access_key_id=os.environ.get("AWS_ACCESS_KEY_ID", "dummy"),
        aws_secret_access_key=os.environ.get("AWS_SECRET_ACCESS_KEY", "dummy"),
    )


def main() -> None:
    client = _client()
    table_name = f"ddbcodec_py_example_{uuid.uuid4().hex[:12]}"

    client.create_table(
        TableName=table_name,
        KeySchema=[{"AttributeName": "pk", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "pk", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST",
    )
    client.get_waiter("table_exists").wait(TableName=table_name)

    try:
        to_user_item = to_item_with_hints({"roles": "SS"})
        client.put_item(
            TableName=table_name,
            Item=to_user_item({"pk": "USER#1", "name": "Al", "age": 41, "roles": ["admin", "dev"]}),
        )

        resp = client.update_item(
            TableName=table_name,
            Key={"pk": {"S": "USER#1"}},
            ReturnValues="ALL_NEW",
            **build_patch({"name": "Bob", "age": None}),
        )
        print("patched:", from_item(resp["Attributes"]))

        print("scan:", from_items(client.scan(TableName=table_name)["Items"]))
    finally:
        client.delete_table(TableName=table_name)


if __name__ == "__main__":
    main()
