from fastapi import status

from swapstreet.core.errors import (
    AuthorizationException,
    BusinessLogicException,
    ConflictException,
    ResourceNotFoundException,
    invalid_token_error,
    listing_not_found_error,
    profile_exists_error,
)


class TestErrorHierarchy:

    def test_body_shape(self):
        exc = BusinessLogicException("Seller and Buyer cannot be the same user")

        assert exc.status_code == status.HTTP_400_BAD_REQUEST
        assert exc.to_dict() == {
            "error": "business_logic_error",
            "message": "Seller and Buyer cannot be the same user",
            "details": None,
            "status_code": 400,
        }
        assert exc.detail == exc.to_dict()

    def test_default_message(self):
        assert AuthorizationException().message == "Access denied"
        assert ConflictException().status_code == status.HTTP_409_CONFLICT

    def test_not_found_message_from_resource(self):
        exc = ResourceNotFoundException("Message")

        assert exc.message == "Message not found"
        assert exc.details == {"resource": "Message"}

    def test_factories(self):
        assert invalid_token_error().status_code == status.HTTP_401_UNAUTHORIZED
        assert profile_exists_error().error == "resource_conflict"

        exc = listing_not_found_error("abc")
        assert exc.message == "Listing not found"
        assert exc.details == {"listing_id": "abc"}
