"""
Tests for the request authenticator (authcore.dependencies.auth).

These tests cover:
- Authorization header parsing
- Token verification and account checks
- Optional authentication falling back to anonymous
"""

from datetime import timedelta

import pytest


class TestExtractBearerToken:
    """Tests for Authorization header parsing."""

    def test_missing_header_rejected(self, make_request):
        from authcore.core.errors import UnauthorizedError
        from authcore.dependencies.auth import RequestAuthenticator

        with pytest.raises(UnauthorizedError) as exc_info:
            RequestAuthenticator.extract_bearer_token(make_request())

        assert exc_info.value.message == "Authorization header required"

    @pytest.mark.parametrize("header", [
        "Bearer",
        "Token abc",
        "Bearer abc def",
        "abc",
    ])
    def test_malformed_header_rejected(self, make_request, header):
        from authcore.core.errors import UnauthorizedError
        from authcore.dependencies.auth import RequestAuthenticator

        with pytest.raises(UnauthorizedError) as exc_info:
            RequestAuthenticator.extract_bearer_token(
                make_request({"Authorization": header})
            )

        assert exc_info.value.message == "Invalid authorization header format"

    @pytest.mark.parametrize("scheme", ["Bearer", "bearer", "BEARER"])
    def test_scheme_is_case_insensitive(self, make_request, scheme):
        from authcore.dependencies.auth import RequestAuthenticator

        token = RequestAuthenticator.extract_bearer_token(
            make_request({"Authorization": f"{scheme} abc.def.ghi"})
        )

        assert token == "abc.def.ghi"


class TestAuthenticate:
    """Tests for RequestAuthenticator.authenticate."""

    @pytest.mark.asyncio
    async def test_valid_token_yields_identity(
        self, auth_service, registered_user, test_user_data, make_request
    ):
        from authcore.dependencies.auth import RequestAuthenticator

        login = await auth_service.login(test_user_data["email"], test_user_data["password"])
        request = make_request({"Authorization": f"Bearer {login.tokens.access_token}"})

        identity = await RequestAuthenticator(auth_service).authenticate(request)

        assert identity.user_id == registered_user.id
        assert identity.account.email == registered_user.email
        assert request.state.identity is identity

    @pytest.mark.asyncio
    async def test_invalid_token_rejected(self, auth_service, make_request):
        from authcore.core.errors import UnauthorizedError
        from authcore.dependencies.auth import RequestAuthenticator

        request = make_request({"Authorization": "Bearer not-a-token"})

        with pytest.raises(UnauthorizedError) as exc_info:
            await RequestAuthenticator(auth_service).authenticate(request)

        assert exc_info.value.message == "Invalid or expired token"
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    @pytest.mark.asyncio
    async def test_expired_token_rejected(
        self, auth_service, registered_user, make_request
    ):
        from authcore.core.errors import UnauthorizedError
        from authcore.dependencies.auth import RequestAuthenticator

        token = auth_service.tokens.issue_access(
            registered_user.id,
            registered_user.email,
            "aogeri-api",
            timedelta(seconds=-60),
        )

        with pytest.raises(UnauthorizedError) as exc_info:
            await RequestAuthenticator(auth_service).authenticate(
                make_request({"Authorization": f"Bearer {token}"})
            )

        assert exc_info.value.message == "Invalid or expired token"

    @pytest.mark.asyncio
    async def test_unknown_account_rejected(self, auth_service, make_request):
        from authcore.core.errors import UnauthorizedError
        from authcore.dependencies.auth import RequestAuthenticator

        token = auth_service.tokens.issue_access(
            "507f1f77bcf86cd799439011",
            "ghost@example.com",
            "aogeri-api",
            timedelta(minutes=15),
        )

        with pytest.raises(UnauthorizedError) as exc_info:
            await RequestAuthenticator(auth_service).authenticate(
                make_request({"Authorization": f"Bearer {token}"})
            )

        assert exc_info.value.message == "User not found or inactive"

    @pytest.mark.asyncio
    async def test_inactive_account_rejected(
        self, auth_service, registered_user, test_user_data, mock_auth_db, make_request
    ):
        from bson import ObjectId

        from authcore.core.errors import UnauthorizedError
        from authcore.dependencies.auth import RequestAuthenticator

        login = await auth_service.login(test_user_data["email"], test_user_data["password"])
        await mock_auth_db.users.update_one(
            {"_id": ObjectId(registered_user.id)},
            {"$set": {"is_active": False}},
        )

        with pytest.raises(UnauthorizedError) as exc_info:
            await RequestAuthenticator(auth_service).authenticate(
                make_request({"Authorization": f"Bearer {login.tokens.access_token}"})
            )

        assert exc_info.value.message == "User not found or inactive"


class TestAuthenticateOptional:
    """Tests for RequestAuthenticator.authenticate_optional."""

    @pytest.mark.asyncio
    async def test_no_header_is_anonymous(self, auth_service, make_request):
        from authcore.dependencies.auth import RequestAuthenticator

        request = make_request()

        assert await RequestAuthenticator(auth_service).authenticate_optional(request) is None
        assert request.state.identity is None

    @pytest.mark.asyncio
    async def test_bad_token_is_anonymous(self, auth_service, make_request):
        from authcore.dependencies.auth import RequestAuthenticator

        request = make_request({"Authorization": "Bearer garbage"})

        assert await RequestAuthenticator(auth_service).authenticate_optional(request) is None

    @pytest.mark.asyncio
    async def test_valid_token_yields_identity(
        self, auth_service, registered_user, test_user_data, make_request
    ):
        from authcore.dependencies.auth import RequestAuthenticator

        login = await auth_service.login(test_user_data["email"], test_user_data["password"])
        request = make_request({"Authorization": f"Bearer {login.tokens.access_token}"})

        identity = await RequestAuthenticator(auth_service).authenticate_optional(request)

        assert identity.user_id == registered_user.id

    @pytest.mark.asyncio
    async def test_store_failure_propagates(
        self, auth_service, registered_user, test_user_data, make_request, mock_auth_service
    ):
        """Only authentication failures become anonymous; a store outage does not."""
        from pymongo.errors import ServerSelectionTimeoutError

        from authcore.dependencies.auth import RequestAuthenticator

        login = await auth_service.login(test_user_data["email"], test_user_data["password"])
        mock_auth_service.verify_access_token = auth_service.verify_access_token
        mock_auth_service.credentials.find_by_id.side_effect = ServerSelectionTimeoutError("down")

        with pytest.raises(ServerSelectionTimeoutError):
            await RequestAuthenticator(mock_auth_service).authenticate_optional(
                make_request({"Authorization": f"Bearer {login.tokens.access_token}"})
            )
