"""
Preprocessor: Resize

Proportionally resizes images to fit within the preset's width × height.
Smaller images are NOT upscaled — they are returned unchanged.
Uses LANCZOS resampling for best downscale quality.
"""
from PIL import Image


def process(image: Image.Image, preset: dict) -> Image.Image:
    """
    Return a proportionally resized copy if the image exceeds the preset box.
    If the image already fits, the original object is returned unchanged.
    """
    max_w, max_h = preset["width"], preset["height"]
    w, h = image.size
    if w <= max_w and h <= max_h:
        return image

    ratio    = min(max_w / w, max_h / h)
    new_size = (max(1, round(w * ratio)), max(1, round(h * ratio)))
    return image.resize(new_size, Image.LANCZOS)
