from backoffice.crud.admin_association import AdminAssociationRepository


async def test_replace_sets_exact_role_and_permission_sets(session) -> None:
    repo = AdminAssociationRepository(session)

    await repo.replace(2, role_ids=[1, 2], permission_ids=[4])

    assert await repo.role_ids_for(2) == {1, 2}
    assert await repo.permission_ids_for(2) == {4}


async def test_replace_is_idempotent(session) -> None:
    repo = AdminAssociationRepository(session)

    await repo.replace_roles(2, [1, 2])
    await repo.replace_roles(2, [1, 2])
    await session.commit()

    assert await repo.role_ids_for(2) == {1, 2}


async def test_replace_supersedes_previous_links(session) -> None:
    repo = AdminAssociationRepository(session)

    await repo.replace_roles(2, [1, 2])
    await repo.replace_roles(2, [3])

    assert await repo.role_ids_for(2) == {3}


async def test_duplicate_ids_collapse_to_one_link(session) -> None:
    repo = AdminAssociationRepository(session)

    result = await repo.replace_permissions(2, [5, 5, 5])
    await session.commit()

    assert result == {5}
    assert await repo.permission_ids_for(2) == {5}


async def test_empty_sets_remove_every_link(session) -> None:
    repo = AdminAssociationRepository(session)
    await repo.replace(2, role_ids=[1], permission_ids=[1, 2])

    await repo.replace(2, role_ids=[], permission_ids=[])

    assert await repo.role_ids_for(2) == set()
    assert await repo.permission_ids_for(2) == set()


async def test_replace_only_touches_the_given_admin(session) -> None:
    repo = AdminAssociationRepository(session)

    await repo.replace_roles(2, [])

    assert await repo.role_ids_for(1) == {1}


async def test_clear_removes_all_links(session) -> None:
    repo = AdminAssociationRepository(session)
    await repo.replace(1, role_ids=[1, 2], permission_ids=[3])

    await repo.clear(1)

    assert await repo.role_ids_for(1) == set()
    assert await repo.permission_ids_for(1) == set()
