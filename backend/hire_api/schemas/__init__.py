from .pricing import BreakdownLineOut, EstimateIn, EstimateOut
from .inquiry import (
    AcceptQuoteOut,
    InquiryCreate,
    InquiryFields,
    InquiryRead,
    InquiryUpdate,
    SendQuoteIn,
    SendQuoteOut,
)
