from __future__ import annotations

# Sidecar tag keys, in serialization order.
ARTIST = "artist"
ALBUM = "album"
YEAR = "year"
TAG_KEYS = (ARTIST, ALBUM, YEAR)

TAG_FILE_NAME = "mp3tag.txt"
AUDIO_SUFFIX = ".aiff"
OUTPUT_DIR_NAME = "aiff2mp3"
OUTPUT_EXTENSION = ".mp3"
PRODUCT_COMMENT = "Created by aiff2mp3"
