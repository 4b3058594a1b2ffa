"""Central configuration for the image text extractor.

All tunable parameters are defined here with descriptive names.
"""

# =============================================================================
# PIXEL PREPROCESSING
# =============================================================================

# ITU-R BT.601 luma weights, expressed in thousandths so luminance can be
# computed exactly from integer channel values: (299*R + 587*G + 114*B) / 1000
LUMINANCE_WEIGHTS = (299, 587, 114)
LUMINANCE_SCALE = 1000

# Binarization cutoff. Pixels with luminance strictly above it become white.
BINARIZE_THRESHOLD = 128

# Contrast stretch around a fixed midpoint (1.0 = no change)
CONTRAST_FACTOR = 1.5
CONTRAST_MIDPOINT = 128

# Valid 8-bit channel range; contrast output is clamped into it
CHANNEL_MIN = 0
CHANNEL_MAX = 255

# =============================================================================
# RECOGNITION
# =============================================================================

# OCR backend selection ("easyocr" or "tesseract")
OCR_BACKEND = "easyocr"

# Language selected when the form is first shown
DEFAULT_LANGUAGE = "eng"

# EasyOCR runs on CPU unless explicitly enabled
EASYOCR_GPU = False

# Tesseract page segmentation / engine mode
TESSERACT_CONFIG = "--oem 1 --psm 3"

# =============================================================================
# USER-FACING MESSAGES
# =============================================================================

GENERIC_ERROR_MESSAGE = "An error occurred during text recognition."
UNREADABLE_FILE_MESSAGE = "Could not read the selected file as an image."

# Displayed next to the file picker only; not enforced
UPLOAD_SIZE_HINT = "PNG, JPG, GIF up to 10MB"

# =============================================================================
# WEB SERVER
# =============================================================================

SERVER_HOST = "localhost"
SERVER_PORT = 30001
