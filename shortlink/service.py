"""Business logic services for shortlink."""

import logging
from datetime import datetime, timezone
from typing import Optional

from .codec import encode, decode
from .common.url_builder import build_short_url
from .common.validators import is_valid_url, canonicalize_url
from .database.base import LinkStoreBase
from .database.models import ShortLink
from .errors import DecodeError, InvalidUrlError

DEFAULT_FALLBACK_LOCATION = "/"


class ShortenerService:
    """Turns long URLs into short ones."""

    def __init__(
        self,
        store: LinkStoreBase,
        logger: Optional[logging.Logger] = None,
        path_prefix: str = "",
    ):
        """Initialize shortener service.

        Args:
            store: Link store that allocates ids
            logger: Optional logger
            path_prefix: Optional path segment placed between origin and chunk
        """
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.path_prefix = path_prefix

    def create_link(self, raw_url: str) -> ShortLink:
        """Validate a URL and persist it as a new link.

        Every call creates a new record, including for a URL that is
        already stored.

        Args:
            raw_url: The URL submitted by the caller

        Returns:
            The stored link

        Raises:
            InvalidUrlError: If the URL is not absolute or cannot be parsed
            StoreError: If the store fails
        """
        is_valid, error = is_valid_url(raw_url)
        if not is_valid:
            self.logger.debug(f"Rejected URL {raw_url!r}: {error}")
            raise InvalidUrlError(error)

        url = canonicalize_url(raw_url)
        created_at = datetime.now(timezone.utc)
        record_id = self.store.insert(url, created_at=created_at)

        link = ShortLink(id=record_id, url=url, created_at=created_at)
        self.logger.info(f"Created short link {link.chunk} (id={record_id}) -> {url}")
        return link

    def shorten(self, raw_url: str, base_origin: str) -> str:
        """Shorten a URL.

        Args:
            raw_url: The URL submitted by the caller
            base_origin: Origin the short URL lives on (e.g., https://sho.rt)

        Returns:
            The complete short URL

        Raises:
            InvalidUrlError: If the URL is not absolute or cannot be parsed
            StoreError: If the store fails
        """
        link = self.create_link(raw_url)
        return build_short_url(
            chunk=encode(link.id),
            base_url=base_origin,
            path_prefix=self.path_prefix,
        )


class RedirectorService:
    """Maps inbound paths back to stored URLs."""

    def __init__(
        self,
        store: LinkStoreBase,
        logger: Optional[logging.Logger] = None,
        fallback_location: str = DEFAULT_FALLBACK_LOCATION,
    ):
        """Initialize redirector service.

        Args:
            store: Link store to look links up in
            logger: Optional logger
            fallback_location: Where to send requests that do not resolve
        """
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.fallback_location = fallback_location

    def lookup(self, path_segment: str) -> Optional[ShortLink]:
        """Find the link a path segment refers to.

        Args:
            path_segment: Raw path, with or without surrounding slashes

        Returns:
            The link, or None if the segment is not a chunk or nothing is stored under it
        """
        chunk = (path_segment or "").strip("/")

        try:
            record_id = decode(chunk)
        except DecodeError as e:
            self.logger.debug(f"Not a chunk {chunk!r}: {e}")
            return None

        link = self.store.find_by_id(record_id)
        if link is None:
            self.logger.warning(f"No link stored for chunk {chunk} (id={record_id})")
        return link

    def resolve(self, path_segment: str) -> str:
        """Return the location a path segment should redirect to.

        Undecodable segments and unknown ids resolve to the fallback
        location. Store failures propagate.

        Args:
            path_segment: Raw path, with or without surrounding slashes

        Returns:
            Stored URL or the fallback location
        """
        link = self.lookup(path_segment)
        if link is None:
            return self.fallback_location

        self.logger.debug(f"Resolved {link.chunk} -> {link.url}")
        return link.url
