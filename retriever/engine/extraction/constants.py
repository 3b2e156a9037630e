# Path: retriever/engine/extraction/constants.py
"""
Extraction Module Constants

Constants for static resource descriptor parsing and archive expansion.
"""

# ============================================================================
# STATIC RESOURCE FILES
# ============================================================================

# Sidecar describing a static resource (e.g. logo.resource-meta.xml)
RESOURCE_META_SUFFIX = '.resource-meta.xml'

# The resource body itself (e.g. logo.resource)
RESOURCE_SUFFIX = '.resource'

# Descriptor content type marking the body as a zip archive
ZIP_CONTENT_TYPE = 'application/zip'

# ============================================================================
# DESCRIPTOR XML
# ============================================================================

# Any-namespace lookups; descriptors carry the metadata API namespace
TAG_CACHE_CONTROL = '{*}cacheControl'
TAG_CONTENT_TYPE = '{*}contentType'

# ============================================================================
# ARCHIVE EXPANSION
# ============================================================================

ZIP_READ_MODE = 'r'

# Entries starting with this prefix are platform metadata (e.g. __MACOSX/)
RESERVED_ENTRY_PREFIX = '__'

# Buffer size for entry copies (bytes)
COPY_CHUNK_SIZE = 1024 * 1024
