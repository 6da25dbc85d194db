"""File upload, thumbnail and explorer module for Photo Explorer.

Uploaded images are stored flat in the configured upload directory next to a
100x100 thumbnail named ``<name>.thumbnail.<ext>``. Stored files can be
listed, viewed inline or downloaded as attachments.

Supported file types:
- Images: jpg, jpeg, png, gif, webp

Deleting files is not supported.
"""
