"""Shared test fixtures: an in-memory database per test and an API client bound to it."""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from backoffice.admin.permissions import RoleName  # noqa: E402
from backoffice.crud.admin_association import AdminAssociationRepository  # noqa: E402
from backoffice.dependencies import get_db  # noqa: E402
from backoffice.main import app  # noqa: E402
from backoffice.models import Admin, Base, Brand, Category, Item  # noqa: E402
from backoffice.seed import seed_roles_and_permissions  # noqa: E402
from backoffice.utils.security import create_access_token, hash_password  # noqa: E402

SUPER_ADMIN_EMAIL = "admin@example.com"
SUPER_ADMIN_PASSWORD = "correct-horse"
VIEWER_EMAIL = "viewer@example.com"


async def _seed(session: AsyncSession) -> None:
    role_map = await seed_roles_and_permissions(session)
    password = hash_password(SUPER_ADMIN_PASSWORD)

    root = Admin(email=SUPER_ADMIN_EMAIL, name="root", password=password)
    viewer = Admin(email=VIEWER_EMAIL, name="viewer", password=password)
    session.add_all([root, viewer])
    await session.flush()

    associations = AdminAssociationRepository(session)
    await associations.replace_roles(root.id, [role_map[RoleName.SUPERADMIN.value]])
    await associations.replace_roles(viewer.id, [role_map[RoleName.VIEWER.value]])

    books = Category(name="Books")
    music = Category(name="Music")
    acme = Brand(name="Acme")
    session.add_all([books, music, acme])
    await session.flush()

    session.add(
        Item(
            name="Pen",
            description="Blue ballpoint pen",
            price=120,
            brand_id=acme.id,
            category_id=books.id,
        )
    )
    await session.commit()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(test_engine):
    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await _seed(session)
    return factory


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def super_admin(session) -> Admin:
    """Admin id 1, holding the super_admin role."""
    return await session.get(Admin, 1)


@pytest.fixture
async def viewer_admin(session) -> Admin:
    """Admin id 2, holding the read-only viewer role."""
    return await session.get(Admin, 2)


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(1)}"}


@pytest.fixture
def viewer_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(2)}"}
