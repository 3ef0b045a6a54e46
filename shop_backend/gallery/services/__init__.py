from .library import (
    browse,
    bulk_delete,
    create_folder,
    delete_item,
    move_item,
    update_item,
    upload_files,
)

__all__ = [
    "browse",
    "bulk_delete",
    "create_folder",
    "delete_item",
    "move_item",
    "update_item",
    "upload_files",
]
