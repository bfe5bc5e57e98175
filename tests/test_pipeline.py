"""Tests for the full pipeline."""

from pathlib import Path

import pytest

from diagen.errors import InputReadError, RenderError, RendererNotFoundError
from diagen.models import DiagramOptions
from diagen.pipeline import build_graph, run_pipeline, run_scan
from diagen.scanner import discover_files

FIXTURES = Path(__file__).parent / "fixtures"


class FakeRenderer:
    """Stands in for Graphviz; optionally fails for chosen output names."""

    command = "fake-dot"

    def __init__(self, available=True, fail_on=()):
        self.available = available
        self.fail_on = set(fail_on)
        self.rendered = []

    def is_available(self):
        return self.available

    def render(self, dot_src, fmt, out_path):
        if out_path.name in self.fail_on:
            raise RenderError([(out_path, "boom")], command=self.command)
        out_path.write_text(dot_src)
        self.rendered.append(out_path.name)
        return out_path


@pytest.fixture
def files():
    return discover_files([FIXTURES])


def _write_modules(directory, sources):
    paths = []
    for name, text in sources.items():
        path = directory / f"{name}.move"
        path.write_text(text)
        paths.append(path)
    return paths


def test_run_scan_reports_skipped(files):
    modules, skipped = run_scan(files)
    assert [m.name for m in modules] == ["Account", "Event", "Signer"]
    assert skipped == [FIXTURES / "transfer_script.move"]


def test_build_graph(files):
    graph = build_graph(files)
    assert set(graph.forward) == {"Account", "Event", "Signer"}
    assert set(graph.inverse) == {"Account", "Event", "Signer", "Vector"}


def test_dot_outputs(files, tmp_path):
    out = tmp_path / "diagrams" / "nested"
    result = run_pipeline(files, out, DiagramOptions(emit_text_format=True, emit_global_graph=True))

    names = sorted(p.name for p in result.files_created)
    assert names == sorted([
        "(EntireGraph).dot",
        "Account_forward.dot", "Event_forward.dot", "Signer_forward.dot",
        "Account_backward.dot", "Event_backward.dot", "Signer_backward.dot",
        "Vector_backward.dot",
    ])
    assert result.modules_found == 3
    assert result.files_skipped == [FIXTURES / "transfer_script.move"]
    assert (out / "Vector_backward.dot").read_text() == (
        "digraph G {\n    Vector\n    Account\n    Account -> Vector\n}\n"
    )
    assert (out / "Signer_forward.dot").read_text() == "digraph G {\n    Signer\n}\n"


def test_round_trip_scenario(tmp_path):
    paths = _write_modules(tmp_path, {
        "A": "module A {\n    use 0x1::B;\n}\n",
        "B": "module B {\n}\n",
    })
    out = tmp_path / "out"
    run_pipeline(paths, out, DiagramOptions(emit_text_format=True))

    assert (out / "A_forward.dot").read_text() == "digraph G {\n    A\n    B\n    A -> B\n}\n"
    assert (out / "B_backward.dot").read_text() == "digraph G {\n    B\n    A\n    A -> B\n}\n"
    assert (out / "A_backward.dot").read_text() == "digraph G {\n    A\n}\n"


def test_no_outputs_requested(files, tmp_path):
    result = run_pipeline(files, tmp_path / "out", DiagramOptions())
    assert result.files_created == []
    assert (tmp_path / "out").is_dir()


def test_missing_renderer_fails_fast(tmp_path):
    renderer = FakeRenderer(available=False)
    with pytest.raises(RendererNotFoundError) as exc:
        # Unreadable input would fail later; the renderer check comes first
        run_pipeline(
            [tmp_path / "missing.move"], tmp_path / "out",
            DiagramOptions(emit_vector_image=True), renderer=renderer,
        )
    assert "fake-dot" in str(exc.value)
    assert not (tmp_path / "out").exists()


def test_missing_renderer_ignored_for_dot_only(files, tmp_path):
    renderer = FakeRenderer(available=False)
    result = run_pipeline(files, tmp_path, DiagramOptions(emit_text_format=True), renderer=renderer)
    assert result.files_created


def test_unreadable_input(tmp_path):
    with pytest.raises(InputReadError) as exc:
        run_pipeline([tmp_path / "missing.move"], tmp_path / "out", DiagramOptions(emit_text_format=True))
    assert "missing.move" in str(exc.value)


def test_images_through_renderer(files, tmp_path):
    renderer = FakeRenderer()
    options = DiagramOptions(emit_raster_image=True, emit_vector_image=True)
    result = run_pipeline(files, tmp_path, options, renderer=renderer)

    assert "Account_forward.pdf" in renderer.rendered
    assert "Vector_backward.svg" in renderer.rendered
    assert len(result.files_created) == 2 * (3 + 4)


def test_render_failure_aborts(files, tmp_path):
    renderer = FakeRenderer(fail_on={"Event_forward.svg"})
    with pytest.raises(RenderError) as exc:
        run_pipeline(files, tmp_path, DiagramOptions(emit_vector_image=True), renderer=renderer)
    assert "Event_forward.svg" in str(exc.value)
    # Sequential mode stops at the first failure
    assert "Signer_forward.svg" not in renderer.rendered


def test_parallel_matches_sequential(files, tmp_path):
    seq = run_pipeline(files, tmp_path / "seq", DiagramOptions(emit_text_format=True))
    par = run_pipeline(
        files, tmp_path / "par", DiagramOptions(emit_text_format=True, max_workers=4),
    )
    assert [p.name for p in seq.files_created] == [p.name for p in par.files_created]
    for path in seq.files_created:
        assert path.read_text() == (tmp_path / "par" / path.name).read_text()


def test_parallel_collects_all_failures(files, tmp_path):
    renderer = FakeRenderer(fail_on={"Event_forward.svg", "Vector_backward.svg"})
    with pytest.raises(RenderError) as exc:
        run_pipeline(
            files, tmp_path, DiagramOptions(emit_vector_image=True, max_workers=3),
            renderer=renderer,
        )
    assert sorted(p.name for p in exc.value.paths) == ["Event_forward.svg", "Vector_backward.svg"]
    # Every other render still completed
    assert len(renderer.rendered) == 3 + 4 - 2


def test_progress_callback(files, tmp_path):
    stages = []
    run_pipeline(
        files, tmp_path, DiagramOptions(),
        progress=lambda stage, current, total: stages.append((stage, current, total)),
    )
    assert stages[0] == ("Scanning", 0, 4)
    assert stages[-1] == ("Rendering", 7, 7)
