from photobrowse.client.http_client import GalleryHttpClient
from photobrowse.client.parser import PageParser

__all__ = [
	"GalleryHttpClient",
	"PageParser",
]
