# =============================================
# app/query/pagination.py
# =============================================
import math
from typing import List, Sequence, Union

DEFAULT_PAGE_SIZE_OPTIONS = (10, 50, 100)
ELLIPSIS = "..."


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if page_size > 0 else 0


def page_slice(items: Sequence, page: int, page_size: int) -> list:
    start = (page - 1) * page_size
    return list(items[start:start + page_size])


def page_window(current: int, pages: int) -> List[Union[int, str]]:
    """Números del paginador: todos si son 7 o menos, si no primero, último,
    actual ± 2 y '...' en los saltos"""
    if pages <= 7:
        return list(range(1, pages + 1))
    window: List[Union[int, str]] = [1]
    if current > 4:
        window.append(ELLIPSIS)
    for page in range(max(2, current - 2), min(pages - 1, current + 2) + 1):
        window.append(page)
    if current < pages - 3:
        window.append(ELLIPSIS)
    window.append(pages)
    return window


class Paginator:
    """Estado de paginación de una lista (página actual 1-indexada)"""

    def __init__(self, page_size: int = 10, page_size_options: Sequence[int] = DEFAULT_PAGE_SIZE_OPTIONS):
        self.page_size_options = tuple(page_size_options)
        if page_size not in self.page_size_options:
            raise ValueError(f"Tamaño de página inválido: {page_size}")
        self.page_size = page_size
        self.current_page = 1

    def total_pages(self, total: int) -> int:
        return total_pages(total, self.page_size)

    def set_page_size(self, page_size: int) -> None:
        if page_size not in self.page_size_options:
            raise ValueError(
                f"Tamaño de página inválido: {page_size}. Opciones: {list(self.page_size_options)}"
            )
        self.page_size = page_size
        self.current_page = 1

    def go_to(self, page: int, total: int) -> bool:
        """Cambiar de página; fuera de [1, total_pages] no hace nada y devuelve False"""
        if 1 <= page <= self.total_pages(total):
            self.current_page = page
            return True
        return False

    def reset(self) -> None:
        self.current_page = 1

    def page_items(self, items: Sequence) -> list:
        return page_slice(items, self.current_page, self.page_size)

    def window(self, total: int) -> List[Union[int, str]]:
        return page_window(self.current_page, self.total_pages(total))
