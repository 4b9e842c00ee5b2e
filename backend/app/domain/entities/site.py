"""The public identity of the site, used for metadata and structured data."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SiteProfile:
    name: str
    url: str
    description: str
    author: str
    default_image: str = "/og-image.png"
    logo: str = "/logo.png"
    twitter_handle: str = ""
    keywords: tuple[str, ...] = field(default_factory=tuple)

    @property
    def base_url(self) -> str:
        return self.url.rstrip("/")

    def absolute(self, path_or_url: str) -> str:
        """Resolve a site-relative path; absolute http(s) URLs pass through."""
        if path_or_url.startswith(("http://", "https://")):
            return path_or_url
        if not path_or_url.startswith("/"):
            path_or_url = "/" + path_or_url
        return f"{self.base_url}{path_or_url}"
