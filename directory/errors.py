"""
Exceptions raised by the institute directory.

    DirectoryError          base class
    ├── StorageError        a persistence slot could not be written
    └── FormValidationError required form fields were left blank
"""


class DirectoryError(Exception):
    pass


class StorageError(DirectoryError):
    pass


class FormValidationError(DirectoryError):
    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__("Required fields missing: " + ", ".join(missing))
