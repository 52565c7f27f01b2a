"""
Wishlist ordering errors.

Raised by the item re-sequencer and its persistence step; main.py turns
them into JSON responses using each class's status_code.
"""


class WishlistError(Exception):
    """Base class for wishlist ordering failures"""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidRange(WishlistError):
    """oldIndex or newIndex falls outside [0, n-1]"""

    status_code = 400


class NotFound(WishlistError):
    """Wishlist, moving item or path item does not exist"""

    status_code = 404


class ConcurrentModification(WishlistError):
    """Another request holds or has already changed this wishlist's order"""

    status_code = 409


class PartialWriteError(WishlistError):
    """The sort batch did not update every expected row and was rolled back"""

    status_code = 500


class StoreUnavailable(WishlistError):
    """The database call failed or timed out"""

    status_code = 503
