import re

from truthlens.exceptions import ValidationException


class InputValidator:

    CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')
    WHITESPACE_PATTERN = re.compile(r'\s')

    MAX_CONTENT_LENGTH = 20000
    MAX_URL_LENGTH = 2048

    @staticmethod
    def sanitize_content(content: str, field: str = "content") -> str:
        if content is None or not str(content).strip():
            raise ValidationException(field, "cannot be empty")

        content = str(content).strip()

        if len(content) > InputValidator.MAX_CONTENT_LENGTH:
            raise ValidationException(
                field, f"cannot exceed {InputValidator.MAX_CONTENT_LENGTH} characters"
            )

        return InputValidator.CONTROL_CHARS_PATTERN.sub('', content)

    @staticmethod
    def sanitize_url(url: str) -> str:
        url = InputValidator.sanitize_content(url, field="url")

        if len(url) > InputValidator.MAX_URL_LENGTH:
            raise ValidationException("url", f"cannot exceed {InputValidator.MAX_URL_LENGTH} characters")

        if InputValidator.WHITESPACE_PATTERN.search(url):
            raise ValidationException("url", "cannot contain whitespace")

        return url
