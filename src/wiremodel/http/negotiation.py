"""src/wiremodel/http/negotiation.py

Content negotiation: parsing of comma-separated header values with parameters,
and quality-value (``q``) weighting as used by Accept and Accept-Language.
"""

import re
from typing import Dict, List, Tuple

__all__ = ["parse_header_parameters", "parse_quality_values"]

_PARAMETER = re.compile(r"^\s*([^=]+)=(.*?)\s*\Z")
_QUALITY = re.compile(r"^(?:0\.?[0-9]{0,3}|1\.?0{0,3})\Z")


def parse_header_parameters(header: str) -> Dict[str, Dict[str, str]]:
    """
    Parse ``value;key=param, value2`` into an ordered mapping of value to parameters.

    Blank values are skipped. Parameters that are not ``key=value`` are ignored.
    A repeated value replaces the parameters of the earlier one but keeps its
    position.
    """
    result: Dict[str, Dict[str, str]] = {}

    for item in header.split(","):
        value, *parts = item.split(";")
        value = value.strip()

        if not value:
            continue

        parameters: Dict[str, str] = {}
        for part in parts:
            match = _PARAMETER.match(part)
            if match is None:
                continue
            parameters[match.group(1)] = match.group(2)

        result[value] = parameters

    return result


def parse_quality_values(header: str) -> Dict[str, float]:
    """
    Parse a header such as Accept into values ordered by decreasing quality.

    Values with the same quality keep their declaration order. An entry whose
    ``q`` parameter is not a valid quality value is dropped; a missing ``q``
    means 1.0.

    Example:
        ``text/html, application/xml;q=0.9, */*;q=0.8`` gives
        ``{"text/html": 1.0, "application/xml": 0.9, "*/*": 0.8}``.
    """
    values = parse_header_parameters(header)

    count = len(values)
    position = count - 1
    weighted: List[Tuple[str, float, int]] = []

    for value, parameters in values.items():
        parameters = {k.lower(): v for k, v in parameters.items()}

        if "q" in parameters:
            if _QUALITY.match(parameters["q"]) is None:
                continue
            quality = float(parameters["q"])
        else:
            quality = 1.0

        # Earlier declarations get a higher position, which breaks quality ties.
        weight = position + count * int(quality * 1000.0)
        weighted.append((value, quality, weight))
        position -= 1

    weighted.sort(key=lambda entry: entry[2], reverse=True)

    return {value: quality for value, quality, _ in weighted}
