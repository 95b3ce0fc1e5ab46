import base64
import json
from datetime import datetime, timezone
from uuid import uuid4

from swapstreet.schemas.listing import ListingCursor


class TestListingCursor:
    """리스팅 커서 인코딩/디코딩 테스트"""

    def test_round_trip(self):
        cursor = ListingCursor(
            rank=2.0,
            created_at=datetime(2025, 3, 1, 8, 30, 15, 123456, tzinfo=timezone.utc),
            id=uuid4()
        )

        decoded = ListingCursor.decode(cursor.encode())

        assert decoded == cursor

    def test_round_trip_without_rank(self):
        cursor = ListingCursor(rank=None, created_at=datetime(2025, 3, 1, tzinfo=timezone.utc), id=uuid4())

        assert ListingCursor.decode(cursor.encode()) == cursor

    def test_token_is_base64_of_camel_case_json(self):
        listing_id = uuid4()
        cursor = ListingCursor(rank=1.0, created_at=datetime(2025, 3, 1, tzinfo=timezone.utc), id=listing_id)

        payload = json.loads(base64.b64decode(cursor.encode()).decode("utf-8"))

        assert set(payload) == {"rank", "createdAt", "id"}
        assert payload["rank"] == 1.0
        assert payload["id"] == str(listing_id)

    def test_decode_none_and_blank(self):
        assert ListingCursor.decode(None) is None
        assert ListingCursor.decode("") is None
        assert ListingCursor.decode("   ") is None

    def test_decode_not_base64(self):
        assert ListingCursor.decode("not-base64!!") is None

    def test_decode_base64_but_not_json(self):
        token = base64.b64encode(b"hello world").decode("ascii")

        assert ListingCursor.decode(token) is None

    def test_decode_json_missing_fields(self):
        token = base64.b64encode(json.dumps({"rank": 1.0}).encode("utf-8")).decode("ascii")

        assert ListingCursor.decode(token) is None
