"""Tags logical records as central-logger or plain."""

import re

from fea_log_converter.models import ClassifiedRecord, SourceFormat


def is_central_logger_record(text: str, source_format: SourceFormat, central_pattern: re.Pattern) -> bool:
    """Only the FEA client emits central-logger records."""
    return source_format is SourceFormat.FEA and central_pattern.search(text) is not None


def classify_record(
    text: str,
    source_format: SourceFormat,
    client_name: str,
    central_pattern: re.Pattern,
) -> ClassifiedRecord:
    return ClassifiedRecord(
        text=text,
        is_central_logger=is_central_logger_record(text, source_format, central_pattern),
        source_format=source_format,
        client_name=client_name,
    )
