"""
Locates and decodes the results payload embedded in a YouTube search page.

The page ships its initial data as a large inline JSON blob. Only the
``itemSectionRenderer`` object holding the result items is of interest, and
it is cut out of the page using two textual landmarks around it. These
landmarks are not a documented contract; when YouTube changes its page
layout, the patterns below are what break first.
"""

import json
import logging
import re
from typing import Any

from yt_provider.exceptions import (
    BoundaryNotFoundError,
    InvalidRangeError,
    MalformedPayloadError,
)

log = logging.getLogger(__name__)

# Group 1 opens the item-list object.
BEGIN_BOUNDARY = re.compile(r'itemSectionRenderer"\s*:\s*(\{\s*"contents)')
# Group 1 closes the item-list object, right before the continuation item.
END_BOUNDARY = re.compile(
    r'\],"trackingParams":"[a-zA-Z0-9=_-]*"(\})\},\{"continuationItemRenderer"'
)


def find_payload_range(text: str) -> tuple[int, int]:
    """
    Returns the ``(start, end)`` offsets of the item-list object in ``text``.

    Raises:
        BoundaryNotFoundError: If either landmark is missing.
        InvalidRangeError: If the landmarks are out of order.
    """
    begin_match = BEGIN_BOUNDARY.search(text)
    if not begin_match:
        raise BoundaryNotFoundError("begin")

    end_match = END_BOUNDARY.search(text)
    if not end_match:
        raise BoundaryNotFoundError("end")

    start, end = begin_match.start(1), end_match.end(1)
    if start >= end:
        raise InvalidRangeError(start, end)
    return start, end


class ResponseExtractor:
    """Cuts the embedded results object out of a raw search page."""

    def extract(self, text: str) -> Any:
        """
        Extracts and decodes the results container from the response text.

        Args:
            text: The raw body of the search results page.

        Returns:
            The decoded JSON value (a dict holding a ``contents`` array).

        Raises:
            BoundaryNotFoundError, InvalidRangeError, MalformedPayloadError
        """
        start, end = find_payload_range(text)
        payload = text[start:end]
        log.debug(f"Found results payload at [{start}:{end}] ({len(payload)} chars)")

        try:
            return json.loads(payload)
        except json.JSONDecodeError as e:
            raise MalformedPayloadError(str(e)) from e
