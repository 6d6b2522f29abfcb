# Pagination constants
DEFAULT_ITEMS_PER_PAGE = 15  # Rows per page until the owner picks another size
ITEMS_PER_PAGE_OPTIONS = (5, 15, 50)  # Choices offered by the page-size selector

# Search constants
SEARCH_DEBOUNCE_MS = 800  # Quiet period before a search term is committed, in milliseconds
SEARCH_PLACEHOLDER = "Search..."

# Loading placeholder constants
SKELETON_CHAR = "░"
SKELETON_DEFAULT_WIDTH = 8  # Placeholder width for columns without a size hint

# Copy
RESET_FILTERS_LABEL = "Reset filters"
SUMMARY_TEMPLATE = "Showing {first} to {last} of {total} items"
ITEMS_PER_PAGE_LABEL = "Items per page:"
