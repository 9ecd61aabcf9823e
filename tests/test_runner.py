import json
import logging

from fries_factory import ListSink, document, entity, entity_arg, event, sentence
from friesflat.pipeline import ConversionPipeline
from friesflat.runner import ConversionRunner, RunReport


def write_document(directory, basename, collections, skip=()):
    directory.mkdir(parents=True, exist_ok=True)
    for kind, payload in collections.items():
        if kind in skip:
            continue
        path = directory / f"{basename}.uaz.{kind}.json"
        path.write_text(json.dumps(payload), encoding="utf-8")


def binding_document():
    return document(
        [sentence("S1", "A binds B.")],
        [entity("E1", "A"), entity("E2", "B")],
        [
            event(
                "V1",
                "complex-assembly",
                entity_arg("theme", "E1"),
                entity_arg("theme", "E2"),
                sentence="S1",
            )
        ],
    )


def run(tmp_path, filename_map=None):
    sink = ListSink()
    report = ConversionRunner(ConversionPipeline(sink), filename_map).run(tmp_path)
    return sink, report


def test_run_converts_every_complete_document(tmp_path):
    write_document(tmp_path, "PMC1", binding_document())
    write_document(tmp_path / "nested", "PMC2", binding_document())

    sink, report = run(tmp_path)

    assert report == RunReport(documents=2, skipped=0, accepted=4)
    assert sorted({json.loads(text)["docId"] for text in sink.submitted}) == ["PMC1", "PMC2"]


def test_incomplete_and_broken_documents_are_skipped(tmp_path, caplog):
    write_document(tmp_path, "PMC1", binding_document())
    write_document(tmp_path, "PMC2", binding_document(), skip=("sentences",))
    write_document(tmp_path, "PMC3", binding_document())
    (tmp_path / "PMC3.uaz.events.json").write_text("[", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="friesflat"):
        sink, report = run(tmp_path)

    assert report == RunReport(documents=1, skipped=2, accepted=2)
    assert {json.loads(text)["docId"] for text in sink.submitted} == {"PMC1"}
    assert "PMC2: expected 3 part files, missing sentences" in caplog.text
    assert "PMC3: cannot read" in caplog.text


def test_malformed_collection_skips_only_that_document(tmp_path):
    broken = binding_document()
    broken["entities"] = {"no-frames": True}
    write_document(tmp_path, "PMC1", broken)
    write_document(tmp_path, "PMC2", binding_document())

    sink, report = run(tmp_path)

    assert report.skipped == 1
    assert report.documents == 1


def test_filename_map_rewrites_document_ids(tmp_path):
    write_document(tmp_path, "file-0001", binding_document())

    sink, report = run(tmp_path, filename_map={"file-0001": "PMC9001"})

    assert report.documents == 1
    assert {json.loads(text)["docId"] for text in sink.submitted} == {"PMC9001"}


def test_empty_directory_gives_empty_report(tmp_path):
    sink, report = run(tmp_path)

    assert report == RunReport()
    assert sink.submitted == []
