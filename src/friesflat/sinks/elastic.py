"""Elasticsearch index sink.

Tuples arrive as serialized JSON text and are written to a single index,
either one request per tuple or buffered into bulk requests.  Failures are
logged and reported as rejections; they never propagate to the pipeline.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from elastic_transport import TransportError
from elasticsearch import ApiError, Elasticsearch, helpers

if TYPE_CHECKING:  # pragma: no cover
    from ..config import Settings

logger = logging.getLogger(__name__)

DEFAULT_HOSTS = ("http://localhost:9200",)
DEFAULT_INDEX = "results"

ACCEPTED_RESULTS = frozenset({"created", "updated"})


class ElasticsearchSink:
    """Submit serialized tuples to an Elasticsearch index.

    Parameters
    ----------
    hosts:
        Node URLs used to build a client when ``client`` is not given.
    client:
        Existing :class:`~elasticsearch.Elasticsearch` client.  A client passed
        in is not closed by :meth:`close`.
    index_name:
        Target index.
    bulk:
        Buffer documents and write them with the bulk helpers.  Buffered
        documents are accepted as soon as they are queued.
    bulk_concurrency:
        Number of worker threads for ``helpers.parallel_bulk``; ``0`` uses the
        sequential ``helpers.bulk``.
    chunk_size:
        Number of buffered documents that triggers a flush.
    """

    def __init__(
        self,
        hosts: Optional[Sequence[str]] = None,
        *,
        client: Optional[Elasticsearch] = None,
        index_name: str = DEFAULT_INDEX,
        bulk: bool = False,
        bulk_concurrency: int = 0,
        chunk_size: int = 500,
        request_timeout: float = 30.0,
        max_retries: int = 3,
    ) -> None:
        self._owns_client = client is None
        if client is None:
            client = Elasticsearch(
                list(hosts or DEFAULT_HOSTS),
                request_timeout=request_timeout,
                max_retries=max_retries,
                retry_on_timeout=True,
            )
        self.client = client
        self.index_name = index_name
        self.bulk = bulk
        self.bulk_concurrency = max(bulk_concurrency, 0)
        self.chunk_size = max(chunk_size, 1)
        self.indexed = 0
        self.failed = 0
        self._buffer: List[str] = []
        self._batch_indexed = 0

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ElasticsearchSink":
        return cls(
            settings.es_hosts,
            index_name=settings.index_name,
            bulk=settings.bulk_load,
            bulk_concurrency=settings.bulk_concurrency,
            chunk_size=settings.bulk_chunk_size,
            request_timeout=settings.request_timeout,
            max_retries=settings.max_retries,
        )

    # ------------------------------------------------------------------
    def submit(self, text: str) -> bool:
        if self.bulk:
            self._buffer.append(text)
            if len(self._buffer) >= self.chunk_size:
                self.flush()
            return True

        try:
            response = self.client.index(index=self.index_name, document=text)
        except (ApiError, TransportError) as exc:
            self.failed += 1
            logger.warning("Index request to %s failed: %s", self.index_name, exc)
            return False
        if response["result"] in ACCEPTED_RESULTS:
            self.indexed += 1
            return True
        self.failed += 1
        logger.warning("Index request to %s returned %s", self.index_name, response["result"])
        return False

    def flush(self) -> int:
        """Write buffered documents and return how many were indexed."""

        if not self._buffer:
            return 0
        actions, self._buffer = self._buffer, []
        self._batch_indexed = 0
        try:
            if self.bulk_concurrency:
                self._parallel_bulk(actions)
            else:
                self._batch_indexed, _ = helpers.bulk(
                    self.client,
                    actions,
                    index=self.index_name,
                    chunk_size=self.chunk_size,
                    raise_on_error=False,
                    stats_only=True,
                )
        except (ApiError, TransportError) as exc:
            logger.error("Bulk request to %s failed: %s", self.index_name, exc)
        # items confirmed before a failure stay counted as indexed
        success = self._batch_indexed
        failed = len(actions) - success
        self.indexed += success
        self.failed += failed
        if failed:
            logger.warning(
                "%d of %d buffered document(s) were not indexed in %s",
                failed,
                len(actions),
                self.index_name,
            )
        return success

    def _parallel_bulk(self, actions: List[str]) -> None:
        for ok, info in helpers.parallel_bulk(
            self.client,
            actions,
            index=self.index_name,
            thread_count=self.bulk_concurrency,
            chunk_size=self.chunk_size,
            raise_on_error=False,
        ):
            if ok:
                self._batch_indexed += 1
            else:
                logger.debug("Bulk item rejected: %s", info)

    def close(self) -> None:
        """Flush pending documents and release the client if it is ours."""

        self.flush()
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "ElasticsearchSink":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["DEFAULT_HOSTS", "DEFAULT_INDEX", "ElasticsearchSink"]
