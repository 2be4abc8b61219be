"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Wolfram|Alpha (computation service)
WOLFRAM_APP_ID: str = os.getenv("WOLFRAM_APP_ID", "").strip()
WOLFRAM_API_URL: str = "https://api.wolframalpha.com/v2/query"
# Web UI deep link; the URL-encoded query is appended as-is
WOLFRAM_WEB_URL: str = "http://www.wolframalpha.com/input/?i="
# Images still pointing at this host have not been rehosted yet
WOLFRAM_IMAGE_HOST: str = "wolframalpha.com"

# Cloudinary (image hosting)
CLOUDINARY_CLOUD_NAME: str = os.getenv("CLOUDINARY_CLOUD_NAME", "").strip()
CLOUDINARY_API_KEY: str = os.getenv("CLOUDINARY_API_KEY", "").strip()
CLOUDINARY_API_SECRET: str = os.getenv("CLOUDINARY_API_SECRET", "").strip()
CLOUDINARY_UPLOAD_URL: str = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"

# Attachment accent color for the "main" answer
ACCENT_COLOR: str = "#F58120"

# Rehost images in this format
REHOST_FORMAT: str = "png"

# API timeouts (seconds)
WOLFRAM_API_TIMEOUT: float = float(os.getenv("WOLFRAM_API_TIMEOUT", "30"))
UPLOAD_API_TIMEOUT: float = float(os.getenv("UPLOAD_API_TIMEOUT", "30"))
# Upper bound for a single rehost; on expiry the original image is kept
REHOST_TIMEOUT: float = float(os.getenv("REHOST_TIMEOUT", "20"))
