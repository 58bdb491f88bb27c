"""
Unit tests for authentication, category and seed services.

Tests password hashing, credential checks, category resolution, and the
idempotent demo loader.
"""
import pytest
from sqlalchemy import func, select

from db_models import Product
from domain.errors import NotFoundError, UnauthenticatedError, ValidationError
from services import auth_service, category_service
from services.seed_service import seed_demo_data
from tests.conftest import ADMIN_USERNAME, BCRYPT_TEST_ROUNDS, DEMO_PASSWORD


class TestPasswords:

    @pytest.mark.unit
    def test_hash_and_verify(self):
        hashed = auth_service.hash_password("s3cret", rounds=BCRYPT_TEST_ROUNDS)
        assert hashed != "s3cret"
        assert auth_service.verify_password("s3cret", hashed) is True
        assert auth_service.verify_password("S3cret", hashed) is False

    @pytest.mark.unit
    def test_non_bcrypt_hash_does_not_verify(self):
        assert auth_service.verify_password("123456", "123456") is False


class TestAuthenticate:

    @pytest.mark.integration
    async def test_valid_credentials(self, db_session):
        user = await auth_service.authenticate(db_session, username=ADMIN_USERNAME, password=DEMO_PASSWORD)
        assert user.id == 2
        assert user.role == "ADMIN"

    @pytest.mark.integration
    async def test_bad_password(self, db_session):
        with pytest.raises(UnauthenticatedError):
            await auth_service.authenticate(db_session, username=ADMIN_USERNAME, password="nope")

    @pytest.mark.integration
    async def test_get_user_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await auth_service.get_user(db_session, 99)


class TestResolveCategories:

    @pytest.mark.integration
    async def test_dedupes_and_keeps_order(self, db_session):
        categories = await category_service.resolve_categories(db_session, [3, 1, 3])
        assert [c.id for c in categories] == [3, 1]

    @pytest.mark.integration
    async def test_unknown_id_is_validation_error(self, db_session):
        with pytest.raises(ValidationError) as exc_info:
            await category_service.resolve_categories(db_session, [2, 42])
        assert exc_info.value.fields == ["categories"]
        assert exc_info.value.status_code == 422


class TestSeed:

    @pytest.mark.integration
    async def test_second_run_is_a_no_op(self, db_session):
        assert await seed_demo_data(db_session, rounds=BCRYPT_TEST_ROUNDS) is False

        count = await db_session.scalar(select(func.count()).select_from(Product))
        assert count == 25
