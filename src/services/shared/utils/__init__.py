from .http_response import api_response as api_response
from .http_response import register_error_handlers as register_error_handlers
from .http_response import success as success
from .validators import parse_json_body as parse_json_body
from .validators import to_decimal as to_decimal
