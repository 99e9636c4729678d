from os import environ

LIMIT_VALUE_NOTES = environ.get("LIMIT_VALUE_NOTES", "300/minute")
SCOPE_NOTES = "notes"

LIMIT_VALUE_FILES = environ.get("LIMIT_VALUE_FILES", "60/minute")
SCOPE_FILES = "files"

LIMIT_VALUE_CLOUDINARY = environ.get("LIMIT_VALUE_CLOUDINARY", "30/minute")
SCOPE_CLOUDINARY = "cloudinary"

NOTE_NAME_MAX_LENGTH = 100

MEDIA_FOLDER = "devdrop_files"
BULK_DELETE_CHUNK_SIZE = 100

CACHE_KEY_NOTES = "notes:list"
CACHE_KEY_NOTES_GENERATION = "notes:generation"
CACHE_EXPIRE_NOTES = 60
