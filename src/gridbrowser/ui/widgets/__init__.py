from .data_browser import DataBrowser
from .pagination_bar import PaginationBar
from .title_bar import TitleBar

__all__ = ["DataBrowser", "PaginationBar", "TitleBar"]
