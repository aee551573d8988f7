"""
Repository behaviour against a real (SQLite) database.
"""

import asyncio
from datetime import datetime

import pytest

from app.db_handlers import ObservacaoDBHandler, UsuarioDBHandler
from app.exceptions import ConflictError, NotFoundError

pytestmark = [pytest.mark.asyncio, pytest.mark.usefixtures("database")]


@pytest.fixture
def usuarios() -> UsuarioDBHandler:
    return UsuarioDBHandler()


@pytest.fixture
def observacoes() -> ObservacaoDBHandler:
    return ObservacaoDBHandler()


async def test_create_then_get_by_cpf(usuarios):
    created = await usuarios.create_usuario("Ana", "111")

    fetched = await usuarios.get_by_cpf("111")

    assert fetched.id == created.id
    assert fetched.nome == "Ana"
    assert fetched.cpf == "111"
    assert fetched.observacoes == []
    assert fetched.relatorio == ""


async def test_duplicate_cpf_is_conflict_and_keeps_existing_record(usuarios):
    await usuarios.create_usuario("Ana", "111")

    with pytest.raises(ConflictError):
        await usuarios.create_usuario("Outra Ana", "111")

    todos = await usuarios.list_all()
    assert [(u.nome, u.cpf) for u in todos] == [("Ana", "111")]


async def test_get_missing_cpf_is_not_found(usuarios):
    with pytest.raises(NotFoundError):
        await usuarios.get_by_cpf("999")


async def test_list_all_in_creation_order(usuarios):
    for nome, cpf in [("Ana", "1"), ("Bia", "2"), ("Caio", "3")]:
        await usuarios.create_usuario(nome, cpf)

    assert [u.cpf for u in await usuarios.list_all()] == ["1", "2", "3"]


async def test_update_to_cpf_of_other_usuario_is_rejected(usuarios):
    await usuarios.create_usuario("Ana", "111")
    await usuarios.create_usuario("Bia", "222")

    with pytest.raises(ConflictError):
        await usuarios.update_by_cpf("111", {"nome": "Ana Maria", "cpf": "222"})

    ana = await usuarios.get_by_cpf("111")
    bia = await usuarios.get_by_cpf("222")
    assert ana.nome == "Ana"
    assert bia.nome == "Bia"


async def test_update_keeping_own_cpf_succeeds(usuarios):
    await usuarios.create_usuario("Ana", "111")

    updated = await usuarios.update_by_cpf("111", {"nome": "Ana Maria", "cpf": "111"})

    assert updated.nome == "Ana Maria"
    assert updated.cpf == "111"


async def test_update_moves_cpf(usuarios):
    await usuarios.create_usuario("Ana", "111")

    await usuarios.update_by_cpf("111", {"cpf": "333"})

    assert (await usuarios.get_by_cpf("333")).nome == "Ana"
    with pytest.raises(NotFoundError):
        await usuarios.get_by_cpf("111")


async def test_update_missing_usuario_is_not_found(usuarios):
    with pytest.raises(NotFoundError):
        await usuarios.update_by_cpf("404", {"nome": "Ninguém"})


async def test_update_relatorio_overwrites(usuarios):
    await usuarios.create_usuario("Ana", "111")

    await usuarios.update_relatorio("111", "primeiro")
    updated = await usuarios.update_relatorio("111", "segundo")

    assert updated.relatorio == "segundo"


async def test_update_relatorio_missing_usuario_writes_nothing(usuarios):
    with pytest.raises(NotFoundError):
        await usuarios.update_relatorio("404", "texto")

    assert await usuarios.list_all() == []


async def test_create_observacao_shows_up_on_owner(usuarios, observacoes):
    ana = await usuarios.create_usuario("Ana", "111")

    primeira = await observacoes.create_for_cpf("111", "nota1", criado_por="admin")
    segunda = await observacoes.create_for_cpf(
        "111", "nota2", complemento="extra", data=datetime(2024, 1, 2, 3, 4, 5)
    )

    owner = await usuarios.get_by_cpf("111")
    assert [o.id for o in owner.observacoes] == [primeira.id, segunda.id]
    assert primeira.usuario_id == ana.id
    assert primeira.criado_por == "admin"
    assert primeira.data is not None
    assert segunda.complemento == "extra"
    assert segunda.data.replace(tzinfo=None) == datetime(2024, 1, 2, 3, 4, 5)

    listed = await observacoes.list_by_cpf("111")
    assert [o.id for o in listed] == [primeira.id, segunda.id]


async def test_create_observacao_for_missing_owner_is_not_found(observacoes):
    with pytest.raises(NotFoundError):
        await observacoes.create_for_cpf("404", "nota")


async def test_list_observacoes_for_missing_owner_is_not_found(observacoes):
    with pytest.raises(NotFoundError):
        await observacoes.list_by_cpf("404")


async def test_delete_observacao_drops_id_and_keeps_others(usuarios, observacoes):
    await usuarios.create_usuario("Ana", "111")
    manter = await observacoes.create_for_cpf("111", "fica")
    apagar = await observacoes.create_for_cpf("111", "sai")

    await observacoes.delete_by_id(apagar.id)

    owner = await usuarios.get_by_cpf("111")
    assert [o.id for o in owner.observacoes] == [manter.id]
    assert await observacoes.get(apagar.id) is None
    assert [o.id for o in await observacoes.list_by_cpf("111")] == [manter.id]


async def test_concurrent_creates_keep_every_id_on_owner(usuarios, observacoes):
    await usuarios.create_usuario("Ana", "111")

    criadas = await asyncio.gather(
        *(observacoes.create_for_cpf("111", f"nota{i}") for i in range(8))
    )

    owner = await usuarios.get_by_cpf("111")
    listed = await observacoes.list_by_cpf("111")
    assert len(owner.observacoes) == 8
    assert {o.id for o in owner.observacoes} == {o.id for o in criadas}
    assert [o.id for o in owner.observacoes] == [o.id for o in listed]


async def test_delete_observacao_whose_owner_is_gone(observacoes):
    orfa = await observacoes.create({"texto": "sem dono", "usuario_id": "sem-dono"})

    removida = await observacoes.delete_by_id(orfa.id)

    assert removida.id == orfa.id
    assert await observacoes.get(orfa.id) is None


async def test_delete_missing_observacao_is_not_found(observacoes):
    with pytest.raises(NotFoundError):
        await observacoes.delete_by_id("nao-existe")


async def test_delete_usuario_cascades_to_observacoes(usuarios, observacoes):
    await usuarios.create_usuario("Ana", "111")
    await usuarios.create_usuario("Bia", "222")
    notas_ana = [
        await observacoes.create_for_cpf("111", f"nota{i}") for i in range(3)
    ]
    nota_bia = await observacoes.create_for_cpf("222", "da Bia")

    await usuarios.delete_by_cpf("111")

    assert [u.cpf for u in await usuarios.list_all()] == ["222"]
    for nota in notas_ana:
        assert await observacoes.get(nota.id) is None
        with pytest.raises(NotFoundError):
            await observacoes.delete_by_id(nota.id)
    assert await observacoes.get(nota_bia.id) is not None


async def test_delete_missing_usuario_is_not_found(usuarios):
    with pytest.raises(NotFoundError):
        await usuarios.delete_by_cpf("404")
