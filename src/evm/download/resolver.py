"""Map version strings to download URLs and confirm they exist.

Elasticsearch archives have lived under three hosting schemes. The
leading component of the version string picks the scheme:

  1.x  download.elastic.co/elasticsearch/elasticsearch/
  2.x  download.elastic.co/.../distribution/tar/elasticsearch/<version>/
  5.x  artifacts.elastic.co/downloads/elasticsearch/
"""

from __future__ import annotations

import logging

import httpx

from evm.errors import ArtifactNotFoundError, UnknownVersionFamilyError

logger = logging.getLogger(__name__)

_URL_TEMPLATES: dict[str, str] = {
    "1": (
        "https://download.elastic.co/elasticsearch/elasticsearch/"
        "elasticsearch-{version}.tar.gz"
    ),
    "2": (
        "https://download.elastic.co/elasticsearch/release/org/elasticsearch/"
        "distribution/tar/elasticsearch/{version}/elasticsearch-{version}.tar.gz"
    ),
    "5": "https://artifacts.elastic.co/downloads/elasticsearch/elasticsearch-{version}.tar.gz",
}

KNOWN_FAMILIES: tuple[str, ...] = tuple(_URL_TEMPLATES)


def version_family(version: str) -> str:
    """Return the leading component of *version* ("5" for "5.3.1")."""
    return version.strip().split(".", 1)[0]


def build_download_url(version: str) -> str:
    """Fill in the URL template for *version*'s family. Pure, no network."""
    family = version_family(version)
    template = _URL_TEMPLATES.get(family)
    if template is None:
        raise UnknownVersionFamilyError(
            f"Unknown version '{version}'. "
            f"Supported major versions: {', '.join(f'{f}.x' for f in KNOWN_FAMILIES)}."
        )
    return template.format(version=version)


class HttpDownloadResolver:
    """Confirms a candidate URL with a HEAD request before handing it out.

    Only 2xx counts as found. Any other status, and any transport error,
    is reported as ArtifactNotFoundError.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    async def resolve(self, version: str) -> str:
        url = build_download_url(version)
        try:
            resp = await self._http.head(url)
        except httpx.HTTPError as exc:
            logger.debug("HEAD %s failed: %s", url, exc)
            raise ArtifactNotFoundError(
                f"Unknown version '{version}': cannot reach {url} ({type(exc).__name__})."
            ) from exc

        if not resp.is_success:
            raise ArtifactNotFoundError(
                f"Unknown version '{version}': {url} responded with HTTP {resp.status_code}."
            )
        logger.info("Resolved %s to %s", version, url)
        return url
