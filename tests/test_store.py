# tests/test_store.py
import pytest

from flowsync.models import Edge, Node, Position, Status
from flowsync.services import GraphChange, GraphIntegrityError, GraphObserver, GraphStore


class Recorder(GraphObserver):
    def __init__(self):
        self.changes = []

    def update(self, change: GraphChange) -> None:
        self.changes.append(change)


def test_create_node_mints_distinct_refs_without_persisted_id():
    """Dos create_node seguidos: refs distintos y sin id persistido."""
    store = GraphStore()
    a = store.create_node({"type": "http_get"}, Position(1, 2))
    b = store.create_node({"type": "http_get"}, Position(3, 4))

    assert a.ref != b.ref
    assert a.persisted_id is None and b.persisted_id is None
    assert store.list_nodes() == (a, b)
    assert a.node_type == "http_get"


def test_mutations_replace_snapshot_instead_of_mutating():
    """Un snapshot leído antes de mutar no cambia."""
    store = GraphStore()
    store.create_node({}, Position())
    before = store.list_nodes()

    store.create_node({}, Position())

    assert len(before) == 1
    assert len(store.list_nodes()) == 2


def test_update_node_patches_only_target(store):
    n2, n3 = store.get_node("n2"), store.get_node("n3")

    patched = store.update_node("n1", block={"type": "changed"})

    assert patched.block == {"type": "changed"}
    assert patched.ref == "n1" and patched.persisted_id == "10"
    assert store.get_node("n2") is n2
    assert store.get_node("n3") is n3


def test_update_node_unknown_ref_is_noop(store):
    before = store.list_nodes()
    rec = Recorder()
    store.attach(rec)

    assert store.update_node("missing", position=Position(9, 9)) is None
    assert store.list_nodes() is before
    assert rec.changes == []


def test_update_node_rejects_ref_status_and_selected(store):
    with pytest.raises(ValueError):
        store.update_node("n1", ref="other")
    with pytest.raises(ValueError):
        store.update_node("n1", status=Status("running"))
    with pytest.raises(ValueError):
        store.update_node("n1", selected=True)
    assert store.get_node("n1").selected is False


def test_patch_status_keeps_structure_and_identity(store):
    """
    Cambiar status de los elementos que cumplen el predicado no toca
    campos estructurales, y los demás conservan su identidad.
    """
    nodes_before = store.list_nodes()
    edges_before = store.list_edges()

    store.patch_status("nodes", Status("running"), lambda n: n.ref == "n1")
    store.patch_status("edges", Status("running"), lambda e: e.target == "n1")

    n1_before, n1_after = nodes_before[0], store.list_nodes()[0]
    assert n1_after.status == Status("running")
    for field in ("persisted_id", "ref", "position", "block"):
        assert getattr(n1_after, field) == getattr(n1_before, field)

    assert store.list_nodes()[1] is nodes_before[1]
    assert store.list_nodes()[2] is nodes_before[2]

    e_after = store.list_edges()[0]
    assert e_after.status == Status("running")
    assert (e_after.source, e_after.target, e_after.source_handle, e_after.persisted_id) == (
        "n2", "n1", "out", "20"
    )
    assert store.list_edges()[1] is edges_before[1]


def test_patch_status_returns_changed_count_and_skips_equal(store):
    assert store.patch_status("nodes", Status("success")) == 3
    snapshot = store.list_nodes()
    assert store.patch_status("nodes", Status("success")) == 0
    assert store.list_nodes() is snapshot


def test_patch_status_unknown_collection(store):
    with pytest.raises(ValueError):
        store.patch_status("members", None)


def test_load_replaces_everything_and_drops_dangling_edges(store):
    store.load([Node(ref="x")], [Edge(source="x", target="gone"), Edge(source="x", target="x")])

    assert [n.ref for n in store.list_nodes()] == ["x"]
    assert store.list_edges() == (Edge(source="x", target="x"),)


def test_connect_requires_existing_nodes(store):
    edge = store.connect("n1", "n3", source_handle="out")
    assert store.list_edges()[-1] is edge

    with pytest.raises(GraphIntegrityError):
        store.connect("n1", "nope")


def test_remove_node_removes_attached_edges(store):
    assert store.remove_node("n2") is True
    assert [n.ref for n in store.list_nodes()] == ["n1", "n3"]
    assert store.list_edges() == ()
    assert store.remove_node("n2") is False


def test_remove_edge_by_identity(store):
    edge = store.list_edges()[0]
    assert store.remove_edge(edge) is True
    assert edge not in store.list_edges()
    assert store.remove_edge(edge) is False


def test_observers_receive_full_snapshots(store):
    rec = Recorder()
    store.attach(rec)

    store.move_node("n3", 5, 5)
    store.connect("n3", "n1")

    assert [c.kind for c in rec.changes] == ["nodes", "edges"]
    assert rec.changes[-1].nodes == store.list_nodes()
    assert rec.changes[-1].edges == store.list_edges()

    store.detach(rec)
    store.move_node("n3", 6, 6)
    assert len(rec.changes) == 2
