from .inquiry import Inquiry, InquiryStatus

__all__ = [
    "Inquiry",
    "InquiryStatus",
]
