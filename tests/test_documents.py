"""
Tests de documentos del empleado: parseo JSON / formato antiguo, subida y borrado.
"""
import json

import pytest

from cuadrante.core.exceptions import NotFound
from cuadrante.schemas.document import DocumentOut
from cuadrante.services.document_service import DocumentService, merge_documents, parse_documents
from cuadrante.services.file_storage import safe_file_name
from cuadrante.store import EMPLOYEES
from tests.conftest import add_employee


# ── Helpers puros ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("name, expected", [
    ("Contrato firmado (1).pdf", "Contrato_firmado_1.pdf"),
    ("  nómina julio.pdf ", "nmina_julio.pdf"),
    ("../../etc/passwd", "....etcpasswd"),
    ("", "archivo.pdf"),
    (None, "archivo.pdf"),
    ("(((", "archivo.pdf"),
])
def test_safe_file_name(name, expected):
    assert safe_file_name(name) == expected


def test_parse_documents_json():
    raw = json.dumps([{"name": "dni.pdf", "url": "/media/a/dni.pdf", "size": 10}, {"name": "sin url"}])
    assert parse_documents(raw) == [DocumentOut(name="dni.pdf", url="/media/a/dni.pdf", size=10)]


def test_parse_documents_legacy_format():
    docs = parse_documents("Contrato | https://x/contrato.pdf, DNI | https://x/dni.pdf, basura")
    assert [(d.name, d.url) for d in docs] == [
        ("Contrato", "https://x/contrato.pdf"),
        ("DNI", "https://x/dni.pdf"),
    ]


def test_parse_documents_empty():
    assert parse_documents(None) == []
    assert parse_documents("") == []
    assert parse_documents('{"name": "x"}') == []


def test_merge_documents_replaces_same_url():
    a = DocumentOut(name="a.pdf", url="/media/a.pdf")
    b = DocumentOut(name="b.pdf", url="/media/b.pdf")
    a_again = DocumentOut(name="a (copia).pdf", url="/media/a.pdf")
    assert merge_documents([a], [b, a_again, b]) == [a_again, b]


# ── Servicio ──────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_add_and_remove_documents(any_store, files):
    emp = await add_employee(any_store, "Carmen")
    service = DocumentService(any_store, files)

    docs = await service.add_documents(emp["id"], [("Contrato firmado.pdf", b"%PDF-1.4 x"), ("dni.png", b"img")])
    assert [d.name for d in docs] == ["Contrato_firmado.pdf", "dni.png"]
    assert docs[0].url == f"/media/empleados-docs/{emp['id']}/Contrato_firmado.pdf"
    assert docs[0].size == 10
    stored_file = files.root / "empleados-docs" / str(emp["id"]) / "Contrato_firmado.pdf"
    assert stored_file.read_bytes() == b"%PDF-1.4 x"

    # same file again → same URL, listed once with the new size
    docs = await service.add_documents(emp["id"], [("Contrato firmado.pdf", b"%PDF-1.4 nuevo")])
    assert [d.name for d in docs] == ["Contrato_firmado.pdf", "dni.png"]
    assert docs[0].size == 14
    assert stored_file.read_bytes() == b"%PDF-1.4 nuevo"

    remaining = await service.remove_document(emp["id"], docs[0].url)
    assert [d.name for d in remaining] == ["dni.png"]
    assert not stored_file.exists()
    assert await service.list_documents(emp["id"]) == remaining

    record = await any_store.get(EMPLOYEES, emp["id"])
    assert json.loads(record["documents"]) == [{"name": "dni.png", "url": remaining[0].url, "size": 3}]


@pytest.mark.asyncio
async def test_remove_unknown_document(any_store, files):
    emp = await add_employee(any_store, "Carmen")
    with pytest.raises(NotFound):
        await DocumentService(any_store, files).remove_document(emp["id"], "/media/nada.pdf")


@pytest.mark.asyncio
async def test_legacy_documents_rewritten_as_json(any_store, files):
    emp = await add_employee(any_store, "Carmen", documents="Contrato | https://old/contrato.pdf")
    service = DocumentService(any_store, files)

    docs = await service.add_documents(emp["id"], [("dni.pdf", b"x")])

    assert [d.name for d in docs] == ["Contrato", "dni.pdf"]
    record = await any_store.get(EMPLOYEES, emp["id"])
    assert json.loads(record["documents"])[0] == {"name": "Contrato", "url": "https://old/contrato.pdf"}
