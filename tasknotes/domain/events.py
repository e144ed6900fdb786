from enum import Enum

class DocumentEvent(str, Enum):
    CHANGED = "changed"
    OPENED = "opened"
    NEW = "new"
    SAVED = "saved"

    def __str__(self):
        return self.value
