from .amount import Amount as Amount
from .page_request import PageRequest as PageRequest
