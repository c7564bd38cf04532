"""Services — orchestrate core rules around the storage collaborator."""
