import os
import logging
import boto3
from dotenv import load_dotenv

dotenv_path = os.path.join(os.path.dirname(__file__), '..', '.env')

load_dotenv(dotenv_path)

logger = logging.getLogger(__name__)

class Config:
    DB_REGION_NAME = os.getenv('AWS_DEFAULT_REGION')
    DB_ACCESS_KEY_ID = os.getenv('AWS_ACCESS_KEY_ID')
    DB_SECRET_ACCESS_KEY = os.getenv('AWS_SECRET_ACCESS_KEY')
    DB_ENDPOINT_URL = os.getenv('DB_ENDPOINT_URL')
    ITEMS_TABLE_NAME = os.getenv('ITEMS_TABLE_NAME', 'items')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

def get_ddb_resource():
    return boto3.resource('dynamodb',
                          region_name=Config.DB_REGION_NAME,
                          endpoint_url=Config.DB_ENDPOINT_URL,
                          aws_access_key_id=Config.DB_ACCESS_KEY_ID,
                          aws_secret_access_key=Config.DB_SECRET_ACCESS_KEY)

def get_ddb_instance():
    return get_ddb_resource().Table(Config.ITEMS_TABLE_NAME)

# Items are keyed by their string id only; every finder is a filtered scan
def create_items_table(ddb=None):
    ddb = ddb or get_ddb_resource()
    table = ddb.create_table(
        TableName=Config.ITEMS_TABLE_NAME,
        KeySchema=[
            {
                'AttributeName': 'id',
                'KeyType': 'HASH'
            }
        ],
        AttributeDefinitions=[
            {
                'AttributeName': 'id',
                'AttributeType': 'S'
            }
        ],
        BillingMode='PAY_PER_REQUEST'
    )
    table.wait_until_exists()
    logger.info("Created table %s", Config.ITEMS_TABLE_NAME)
    return table
