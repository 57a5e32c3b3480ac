"""Map pointer positions on a letterboxed photograph to image percentages."""

from ..models.geometry import ContainerSize, ImageSize, RenderedRect, ViewTransform
from ..models.inspection import MarkerPosition
from ..utils.logger import get_logger

logger = get_logger(__name__)


def compute_rendered_rect(container: ContainerSize, natural: ImageSize) -> RenderedRect:
    """
    Compute where a 'contain'-scaled image sits inside its container.

    The image is scaled to fit while keeping its aspect ratio, so padding
    bars appear either above and below it or on its left and right.

    Args:
        container: Rendered container dimensions
        natural: Intrinsic image dimensions

    Returns:
        Offset and size of the displayed image, in container coordinates
    """
    container_ratio = container.width / container.height
    image_ratio = natural.width / natural.height

    if image_ratio > container_ratio:
        # Wider than the container: bars above and below
        width = container.width
        height = container.width / image_ratio
        offset_x = 0.0
        offset_y = (container.height - height) / 2
    else:
        height = container.height
        width = container.height * image_ratio
        offset_y = 0.0
        offset_x = (container.width - width) / 2

    return RenderedRect(offset_x=offset_x, offset_y=offset_y, width=width, height=height)


def map_click_to_image(
    click_x: float,
    click_y: float,
    container: ContainerSize,
    natural: ImageSize,
) -> MarkerPosition | None:
    """
    Convert a click inside the image container into a marker position.

    Coordinates are relative to the container's top-left corner in unscaled
    content space. Clicks on the padding bars are ignored.

    Args:
        click_x: Horizontal click position in the container
        click_y: Vertical click position in the container
        container: Rendered container dimensions
        natural: Intrinsic image dimensions (known once the image has loaded)

    Returns:
        Percentage position on the original image, or None for padding clicks
    """
    rect = compute_rendered_rect(container, natural)

    if not rect.contains(click_x, click_y):
        logger.debug(f"Ignoring click at ({click_x:.1f}, {click_y:.1f}) outside rendered image")
        return None

    x_percent = (click_x - rect.offset_x) / rect.width * 100
    y_percent = (click_y - rect.offset_y) / rect.height * 100

    # Rounding can push an edge click just past the image
    if not (0 <= x_percent <= 100 and 0 <= y_percent <= 100):
        return None

    return MarkerPosition(x=x_percent, y=y_percent)


def map_viewport_click_to_image(
    click_x: float,
    click_y: float,
    container: ContainerSize,
    natural: ImageSize,
    transform: ViewTransform,
) -> MarkerPosition | None:
    """
    Map a click given in viewport coordinates of a panned/zoomed view.

    The pan/zoom transform is inverted first, then the click is mapped as an
    unscaled content click.

    Args:
        click_x: Horizontal click position in the viewport
        click_y: Vertical click position in the viewport
        container: Unscaled container dimensions
        natural: Intrinsic image dimensions
        transform: Pan/zoom transform currently applied to the content

    Returns:
        Percentage position on the original image, or None for padding clicks
    """
    content_x, content_y = transform.to_content(click_x, click_y)
    return map_click_to_image(content_x, content_y, container, natural)


def percent_to_container(
    position: MarkerPosition,
    container: ContainerSize,
    natural: ImageSize,
) -> tuple[float, float]:
    """
    Inverse of :func:`map_click_to_image`: place a marker inside the container.

    Args:
        position: Marker position in percent of the original image
        container: Rendered container dimensions
        natural: Intrinsic image dimensions

    Returns:
        (x, y) in container coordinates
    """
    rect = compute_rendered_rect(container, natural)
    return (
        rect.offset_x + position.x / 100 * rect.width,
        rect.offset_y + position.y / 100 * rect.height,
    )


def percent_to_pixels(position: MarkerPosition, natural: ImageSize) -> tuple[int, int]:
    """Convert a marker position to integer pixel coordinates on the bitmap."""
    x = round(position.x / 100 * (natural.width - 1))
    y = round(position.y / 100 * (natural.height - 1))
    return int(x), int(y)
