from .parsing import extract_json_block, extract_delta_content, extract_message_content
from .validation import InputValidator
from .images import inspect_image, to_data_uri

__all__ = [
    "extract_json_block",
    "extract_delta_content",
    "extract_message_content",
    "InputValidator",
    "inspect_image",
    "to_data_uri",
]
