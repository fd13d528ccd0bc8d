from .dynamodb_store import METADATA as METADATA
from .dynamodb_store import DynamoDBStore as DynamoDBStore
from .dynamodb_store import StorageException as StorageException
from .dynamodb_store import Transaction as Transaction
from .dynamodb_store import all_of as all_of
