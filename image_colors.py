import io
import logging
import math
from collections import Counter

from PIL import Image, ImageCms

from color_logic import rgb_to_hex
from errors import ImageLoadError
from settings import DEFAULT_SETTINGS

logger = logging.getLogger(__name__)

# Channel sums outside this range are treated as background black/white.
MIN_CHANNEL_SUM = 20
MAX_CHANNEL_SUM = 740


def open_image(source):
    """
    Accepts a PIL image, a filesystem path or a binary file object.
    """
    if isinstance(source, Image.Image):
        return source
    try:
        image = Image.open(source)
        image.load()
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageLoadError(f"Failed to load image: {e}", source=str(source)) from e
    return image

def convert_to_srgb(image, color_managed=True):
    """
    Converts an image to RGB, going through its embedded ICC profile to sRGB
    when there is one. Without a profile (or when color_managed is off) the
    pixels are taken as sRGB already.

    The profile is applied to the image in its own mode (CMYK, L, ...) first;
    images whose mode the profile cannot read directly, such as RGBA or P
    with an RGB profile, are converted to RGB and transformed again.
    """
    icc_profile = image.info.get("icc_profile")
    if not color_managed or not icc_profile:
        return image.convert("RGB")

    try:
        source_profile = ImageCms.ImageCmsProfile(io.BytesIO(icc_profile))
    except (ImageCms.PyCMSError, OSError, ValueError) as e:
        logger.warning("Unreadable ICC profile, using raw pixels: %s", e)
        return image.convert("RGB")
    srgb_profile = ImageCms.createProfile("sRGB")

    if image.mode != "RGB":
        try:
            return ImageCms.profileToProfile(image, source_profile, srgb_profile, outputMode="RGB")
        except (ImageCms.PyCMSError, OSError, ValueError) as e:
            logger.debug("Profile does not fit %s pixels, retrying as RGB: %s", image.mode, e)

    rgb = image.convert("RGB")
    try:
        return ImageCms.profileToProfile(rgb, source_profile, srgb_profile, outputMode="RGB")
    except (ImageCms.PyCMSError, OSError, ValueError) as e:
        logger.warning("ICC conversion failed, using raw pixels: %s", e)
        return rgb

def quantize_channel(value, step):
    """
    Round to the nearest multiple of step, capped at 255.
    """
    return min(255, int(math.floor(value / step + 0.5)) * step)

def extract_colors(source, sample_limit=None, top=None, step=None, color_managed=None, settings=None):
    """
    Most frequent colors of an image as hex strings, most frequent first.

    At most `sample_limit` pixels are looked at (evenly spaced), near-black
    and near-white pixels are skipped and channels are snapped to multiples
    of `step` so that close shades count as one color.
    """
    settings = settings or DEFAULT_SETTINGS
    if sample_limit is None:
        sample_limit = settings["image_sample_limit"]
    if top is None:
        top = settings["image_top_colors"]
    if step is None:
        step = settings["image_rounding_step"]
    if color_managed is None:
        color_managed = settings["color_managed"]
    if sample_limit < 1:
        raise ValueError(f"sample_limit must be at least 1, got {sample_limit}")
    if step < 1:
        raise ValueError(f"step must be at least 1, got {step}")

    image = convert_to_srgb(open_image(source), color_managed)
    data = image.tobytes()
    pixel_count = image.width * image.height
    interval = max(1, pixel_count // sample_limit)

    counts = Counter()
    for offset in range(0, len(data), 3 * interval):
        r, g, b = data[offset], data[offset + 1], data[offset + 2]
        total = r + g + b
        if total < MIN_CHANNEL_SUM or total > MAX_CHANNEL_SUM:
            continue
        counts[rgb_to_hex(quantize_channel(r, step),
                          quantize_channel(g, step),
                          quantize_channel(b, step))] += 1

    logger.debug("Kept %d sampled pixels of %d, %d distinct colors",
                 sum(counts.values()), pixel_count, len(counts))
    return [hex_val for hex_val, _ in counts.most_common(top)]
