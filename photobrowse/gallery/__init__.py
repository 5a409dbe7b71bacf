from photobrowse.gallery.errors import EmptyPageError, FetchFailure, GalleryError, MalformedResponseError
from photobrowse.gallery.loader import PageLoader
from photobrowse.gallery.models import (
	Direction,
	GalleryFilter,
	GallerySnapshot,
	Image,
	Landing,
	Link,
	LoadRequest,
	Page,
	PageLoaded,
	ViewerState,
)
from photobrowse.gallery.navigator import ViewerNavigator

__all__ = [
	"Direction",
	"EmptyPageError",
	"FetchFailure",
	"GalleryError",
	"GalleryFilter",
	"GallerySnapshot",
	"Image",
	"Landing",
	"Link",
	"LoadRequest",
	"MalformedResponseError",
	"Page",
	"PageLoaded",
	"PageLoader",
	"ViewerNavigator",
	"ViewerState",
]
