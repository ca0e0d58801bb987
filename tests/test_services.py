"""
Tests for the admin, category, brand and item services.

Covers:
- create/edit/delete/list flows against a real database
- the order of checks: lookup, validation, uniqueness, write
- duplicate-key races reported as uniqueness conflicts
"""
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from backoffice.crud.admin_association import AdminAssociationRepository
from backoffice.errors import (
    NotFoundError,
    PermissionError,
    PersistenceError,
    UniquenessConflict,
    ValidationError,
)
from backoffice.schemas.pagination import PageParams
from backoffice.services.admin import (
    AdminService,
    BrandService,
    CategoryService,
    ItemService,
)
from backoffice.crud.admin import AdminRepository
from backoffice.crud.base import NaturalKey
from backoffice.services.admin.transaction import write_transaction

CATEGORY_KEY = NaturalKey(
    field="name", column="categories.name", constraint="uq_categories_name_active"
)
ADMIN_KEY = AdminRepository(AsyncMock()).natural_key
from backoffice.utils.security import verify_password


class TestAdminService:
    async def test_create_with_multibyte_identifier_and_links(self, session, super_admin) -> None:
        service = AdminService(session)

        created = await service.create(
            {
                "userId": "ああああああああああ",
                "userName": "あ",
                "password": "secret",
                "adminRoles": [1],
                "adminPermissions": [1],
            },
            super_admin,
        )

        assert created.id is not None
        assert created.user_id == "ああああああああああ"
        assert created.user_name == "あ"
        assert [role.id for role in created.roles] == [1]
        assert [permission.id for permission in created.permissions] == [1]

        stored = await service.admin_repo.find_by_id(created.id)
        assert verify_password("secret", stored.password)

    async def test_create_requires_password(self, session, super_admin) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await AdminService(session).create(
                {"userId": "new@example.com", "userName": "new"}, super_admin
            )

        assert exc_info.value.fields == ["password"]

    async def test_create_rejects_taken_identifier(self, session, super_admin) -> None:
        with pytest.raises(UniquenessConflict) as exc_info:
            await AdminService(session).create(
                {"userId": "viewer@example.com", "userName": "dup", "password": "x"},
                super_admin,
            )

        assert exc_info.value.details == {"field": "userId", "value": "viewer@example.com"}

    async def test_create_rejects_unknown_role_ids(self, session, super_admin) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await AdminService(session).create(
                {
                    "userId": "new@example.com",
                    "userName": "new",
                    "password": "x",
                    "adminRoles": [1, 99],
                },
                super_admin,
            )

        assert exc_info.value.fields == ["adminRoles"]

    async def test_edit_keeps_own_identifier_and_replaces_links(self, session, super_admin) -> None:
        service = AdminService(session)

        updated = await service.edit(
            2,
            {
                "userId": "viewer@example.com",
                "userName": "renamed",
                "adminRoles": [2],
                "adminPermissions": [3, 3],
            },
            super_admin,
        )

        assert updated.user_name == "renamed"
        assert [role.id for role in updated.roles] == [2]
        assert [permission.id for permission in updated.permissions] == [3]

    async def test_edit_without_password_keeps_hash(self, session, super_admin) -> None:
        service = AdminService(session)
        before = (await service.admin_repo.find_by_id(2)).password

        await service.edit(2, {"userId": "viewer@example.com", "userName": "viewer"}, super_admin)

        assert (await service.admin_repo.find_by_id(2)).password == before

    async def test_edit_rejects_identifier_of_another_admin(self, session, super_admin) -> None:
        with pytest.raises(UniquenessConflict):
            await AdminService(session).edit(
                2, {"userId": "admin@example.com", "userName": "viewer"}, super_admin
            )

    async def test_edit_missing_admin_is_not_found_before_validation(
        self, session, super_admin
    ) -> None:
        with pytest.raises(NotFoundError):
            await AdminService(session).edit(999, {}, super_admin)

    async def test_delete_removes_admin_and_links(self, session, super_admin) -> None:
        service = AdminService(session)

        removed = await service.delete(2, super_admin)

        assert removed.id == 2
        with pytest.raises(NotFoundError):
            await service.get(2, super_admin)
        assert await AdminAssociationRepository(session).role_ids_for(2) == set()

    async def test_second_delete_is_not_found(self, session, super_admin) -> None:
        service = AdminService(session)
        await service.delete(2, super_admin)

        with pytest.raises(NotFoundError):
            await service.delete(2, super_admin)

    async def test_admin_cannot_delete_itself(self, session, super_admin) -> None:
        with pytest.raises(ValidationError):
            await AdminService(session).delete(1, super_admin)

    async def test_list_filters_by_permission(self, session, super_admin) -> None:
        service = AdminService(session)
        await service.edit(
            2,
            {"userId": "viewer@example.com", "userName": "viewer", "adminPermissions": [8]},
            super_admin,
        )

        page = await service.list_page(PageParams(page=1, per_page=20), super_admin, permission_id=8)

        assert page.total == 1
        assert [admin.id for admin in page.items] == [2]

    async def test_viewer_cannot_create(self, session, viewer_admin) -> None:
        with pytest.raises(PermissionError):
            await AdminService(session).create(
                {"userId": "new@example.com", "userName": "new", "password": "x"},
                viewer_admin,
            )

    async def test_missing_actor_is_denied(self, session) -> None:
        with pytest.raises(PermissionError):
            await AdminService(session).get(1, None)


class TestCategoryService:
    async def test_delete_soft_deletes_and_hides(self, session, super_admin) -> None:
        service = CategoryService(session)

        removed = await service.delete(1, super_admin)

        assert removed.id == 1
        with pytest.raises(NotFoundError):
            await service.get(1, super_admin)
        page = await service.list_page(PageParams(page=1, per_page=20), super_admin)
        assert [category.id for category in page.items] == [2]
        assert page.total == 1

    async def test_name_of_deleted_category_can_be_reused(self, session, super_admin) -> None:
        service = CategoryService(session)
        await service.delete(1, super_admin)

        created = await service.create({"name": "Books"}, super_admin)

        assert created.id not in (1, 2)

    async def test_create_duplicate_name_conflicts(self, session, super_admin) -> None:
        with pytest.raises(UniquenessConflict) as exc_info:
            await CategoryService(session).create({"name": "Music"}, super_admin)

        assert exc_info.value.field == "name"

    async def test_edit_to_same_name_passes(self, session, super_admin) -> None:
        updated = await CategoryService(session).edit(1, {"name": "Books"}, super_admin)

        assert updated.name == "Books"

    async def test_page_metadata(self, session, super_admin) -> None:
        page = await CategoryService(session).list_page(PageParams(page=2, per_page=1), super_admin)

        assert (page.total, page.page, page.per_page, page.last_page) == (2, 2, 1, 2)
        assert [category.name for category in page.items] == ["Music"]

    async def test_viewer_can_list_but_not_create(self, session, viewer_admin) -> None:
        service = CategoryService(session)

        assert len(await service.list_all(viewer_admin)) == 2
        with pytest.raises(PermissionError):
            await service.create({"name": "Garden"}, viewer_admin)

    async def test_race_past_check_becomes_uniqueness_conflict(
        self, session, super_admin, monkeypatch
    ) -> None:
        service = CategoryService(session)
        monkeypatch.setattr(service.repo, "check_unique", AsyncMock(return_value=True))

        with pytest.raises(UniquenessConflict) as exc_info:
            await service.create({"name": "Music"}, super_admin)

        assert exc_info.value.details == {"field": "name", "value": "Music"}


class TestBrandService:
    async def test_create_and_get(self, session, super_admin) -> None:
        service = BrandService(session)

        created = await service.create({"name": "Globex"}, super_admin)

        fetched = await service.get(created.id, super_admin)
        assert fetched.name == "Globex"

    async def test_long_name_rejected(self, session, super_admin) -> None:
        with pytest.raises(ValidationError):
            await BrandService(session).create({"name": "b" * 21}, super_admin)


class TestItemService:
    async def test_edit_with_long_name_fails_before_uniqueness_and_write(
        self, session, super_admin, monkeypatch
    ) -> None:
        service = ItemService(session)
        check_unique = AsyncMock(return_value=True)
        update = AsyncMock()
        monkeypatch.setattr(service.item_repo, "check_unique", check_unique)
        monkeypatch.setattr(service.item_repo, "update", update)

        with pytest.raises(ValidationError) as exc_info:
            await service.edit(1, {"name": "a" * 11, "description": "ok"}, super_admin)

        assert exc_info.value.fields == ["name"]
        check_unique.assert_not_awaited()
        update.assert_not_awaited()
        assert (await service.get(1, super_admin)).name == "Pen"

    async def test_create_with_references(self, session, super_admin) -> None:
        created = await ItemService(session).create(
            {"name": "Notebook", "description": "A5 notebook", "price": 300,
             "brandId": 1, "categoryId": 1},
            super_admin,
        )

        assert (created.price, created.brand_id, created.category_id) == (300, 1, 1)

    async def test_create_with_deleted_category_is_rejected(self, session, super_admin) -> None:
        await CategoryService(session).delete(2, super_admin)

        with pytest.raises(ValidationError) as exc_info:
            await ItemService(session).create(
                {"name": "Drum", "description": "Snare", "categoryId": 2}, super_admin
            )

        assert exc_info.value.fields == ["categoryId"]

    async def test_create_duplicate_name_conflicts(self, session, super_admin) -> None:
        with pytest.raises(UniquenessConflict):
            await ItemService(session).create(
                {"name": "Pen", "description": "Another pen"}, super_admin
            )

    async def test_delete_then_second_delete_is_not_found(self, session, super_admin) -> None:
        service = ItemService(session)
        await service.delete(1, super_admin)

        with pytest.raises(NotFoundError):
            await service.delete(1, super_admin)

    async def test_list_filters_by_brand(self, session, super_admin) -> None:
        service = ItemService(session)
        await service.create({"name": "Cup", "description": "Mug"}, super_admin)

        page = await service.list_page(PageParams(page=1, per_page=20), super_admin, brand_id=1)

        assert [item.name for item in page.items] == ["Pen"]


class TestWriteTransaction:
    async def test_commits_on_success(self) -> None:
        session = AsyncMock()

        async with write_transaction(session, key=CATEGORY_KEY, value="x"):
            pass

        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()

    async def test_unique_violation_becomes_conflict(self) -> None:
        session = AsyncMock()
        session.commit.side_effect = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed: categories.name")
        )

        with pytest.raises(UniquenessConflict) as exc_info:
            async with write_transaction(session, key=CATEGORY_KEY, value="Books"):
                pass

        assert exc_info.value.value == "Books"
        session.rollback.assert_awaited_once()

    async def test_other_integrity_error_is_fatal(self) -> None:
        session = AsyncMock()
        session.commit.side_effect = IntegrityError(
            "INSERT", {}, Exception("NOT NULL constraint failed: items.description")
        )

        with pytest.raises(PersistenceError):
            async with write_transaction(session, key=CATEGORY_KEY, value="x"):
                pass

        session.rollback.assert_awaited_once()

    async def test_link_table_unique_violation_is_fatal_not_conflict(self) -> None:
        session = AsyncMock()
        session.commit.side_effect = IntegrityError(
            "INSERT",
            {},
            Exception("UNIQUE constraint failed: role_admin.admin_id, role_admin.role_id"),
        )

        with pytest.raises(PersistenceError):
            async with write_transaction(session, key=ADMIN_KEY, value="ok@example.com"):
                pass

        session.rollback.assert_awaited_once()

    async def test_other_entitys_unique_index_is_fatal(self) -> None:
        session = AsyncMock()
        session.commit.side_effect = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed: brands.name")
        )

        with pytest.raises(PersistenceError):
            async with write_transaction(session, key=CATEGORY_KEY, value="Acme"):
                pass

    async def test_postgres_constraint_name_selects_conflict(self) -> None:
        driver_error = Exception(
            'duplicate key value violates unique constraint "ix_admins_email"'
        )
        driver_error.constraint_name = "ix_admins_email"
        session = AsyncMock()
        session.commit.side_effect = IntegrityError("INSERT", {}, driver_error)

        with pytest.raises(UniquenessConflict) as exc_info:
            async with write_transaction(session, key=ADMIN_KEY, value="dup@example.com"):
                pass

        assert exc_info.value.details == {"field": "userId", "value": "dup@example.com"}

    async def test_postgres_link_constraint_is_fatal(self) -> None:
        session = AsyncMock()
        session.commit.side_effect = IntegrityError(
            "INSERT",
            {},
            Exception(
                'duplicate key value violates unique constraint '
                '"uq_role_admin_admin_id_role_id"'
            ),
        )

        with pytest.raises(PersistenceError):
            async with write_transaction(session, key=ADMIN_KEY, value="ok@example.com"):
                pass

        session.rollback.assert_awaited_once()

    async def test_storage_failure_is_fatal_and_not_retried(self) -> None:
        session = AsyncMock()
        session.commit.side_effect = OperationalError("COMMIT", {}, Exception("disk I/O error"))

        with pytest.raises(PersistenceError) as exc_info:
            async with write_transaction(session, key=CATEGORY_KEY, value="x"):
                pass

        assert isinstance(exc_info.value.cause, OperationalError)
        session.commit.assert_awaited_once()

    async def test_errors_inside_block_roll_back_and_propagate(self) -> None:
        session = AsyncMock()

        with pytest.raises(NotFoundError):
            async with write_transaction(session, key=CATEGORY_KEY, value="x"):
                raise NotFoundError("Item", 1)

        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()
