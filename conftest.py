"""Root conftest: pin settings for tests."""

import os

os.environ.setdefault("LISTING_LOG_LEVEL", "DEBUG")
os.environ.setdefault("LISTING_DEEP_LINK_SCHEME", "homescout")
