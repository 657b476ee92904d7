"""Page property keys written by the directive processor.

These are the only keys the resolution engines read. Role keys are
multi-valued; every other key holds a single string value.
"""

PAGE_TYPE = 'ZDocsPageType'
PARENT_PAGE = 'ZDocsParentPage'
INHERIT = 'ZDocsInherit'
STATUS = 'ZDocsStatus'
MANUALS_LIST = 'ZDocsManualsList'
TOPICS_LIST = 'ZDocsTopicsList'
DISPLAY_NAME = 'ZDocsDisplayName'
TOC_NAME = 'ZDocsTOCName'
PAGINATION = 'ZDocsPagination'
PRODUCT_ADMIN = 'ZDocsProductAdmin'
PRODUCT_EDITOR = 'ZDocsProductEditor'
PRODUCT_PREVIEWER = 'ZDocsProductPreviewer'

SINGLE_VALUED_KEYS = (
    PAGE_TYPE,
    PARENT_PAGE,
    INHERIT,
    STATUS,
    MANUALS_LIST,
    TOPICS_LIST,
    DISPLAY_NAME,
    TOC_NAME,
    PAGINATION,
)

MULTI_VALUED_KEYS = (
    PRODUCT_ADMIN,
    PRODUCT_EDITOR,
    PRODUCT_PREVIEWER,
)

ALL_KEYS = SINGLE_VALUED_KEYS + MULTI_VALUED_KEYS

# Stored flag values that count as "not set"
FALSE_FLAG_VALUES = frozenset({'', '0', 'false', 'no', 'off'})


def is_flag_set(value) -> bool:
    """Return True if a stored flag value means the flag is on."""
    if value is None:
        return False
    return str(value).strip().lower() not in FALSE_FLAG_VALUES
