import uuid
from typing import Optional

from app.exceptions import InvalidInput


def get_file_extension(filename: Optional[str]) -> str:
    """
    Return the extension of a file name, including the leading dot.

    Args:
        filename: The original file name

    Returns:
        The substring starting at the last '.' in the name

    Raises:
        InvalidInput: If the name has no extension
    """
    if not filename or "." not in filename:
        raise InvalidInput(f"Invalid file name ({filename})")
    return filename[filename.rindex("."):]


def create_file_name(filename: Optional[str]) -> str:
    """Randomize the storage key so uploads never collide."""
    return f"{uuid.uuid4()}{get_file_extension(filename)}"
