"""Site content - editable documents, backup/restore and uploaded images."""
