# 🔌 servi_pricing/infrastructure/adapters/__init__.py
"""🔌 Адаптери для викликачів рушія ціноутворення."""

from .booking_quote_facade import (
    VISIT_PREAUTH_FEE_TYPE,
    BookingQuote,
    BookingQuoteService,
    IBookingQuoteFacade,
)

__all__ = [
    "BookingQuote",
    "BookingQuoteService",
    "IBookingQuoteFacade",
    "VISIT_PREAUTH_FEE_TYPE",
]
