"""Application-wide constants."""

# Project status values
class ProjectStatus:
    """Project status constants."""
    DRAFT = "draft"
    COMPLETED = "completed"
    DELETED = "deleted"


class ScriptStatus:
    """Script library status constants."""
    ALL_FILTER = "all"  # Filter value only, never stored
    DRAFT = "draft"
    ANALYZED = "analyzed"
    READY = "ready"
    IN_PRODUCTION = "in_production"
    COMPLETED = "completed"


# Project pipeline configuration
FIRST_STAGE = 1
LAST_STAGE = 7
