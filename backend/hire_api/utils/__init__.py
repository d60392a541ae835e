from .errors import error_response
from .email import send_email
from .validation import is_valid_email
