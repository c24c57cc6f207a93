import logging

from freight_ingest.reporting import BatchReport


def test_empty_report():
    report = BatchReport()
    assert report.summary() == {
        "succeeded": 0,
        "failed": 0,
        "total": 0,
        "success_rate": 0.0,
        "confidence": None,
        "results": [],
    }


def test_counts_and_rate():
    report = BatchReport()
    report.add(0, {"material": "Soja"}, {"success": True, "listing_id": "a"})
    report.add(1, {"material": "Trigo"}, {"success": False, "errors": ["peso is required"]})
    report.add(2, {"material": "Maiz"}, {"success": True, "listing_id": "b"})
    summary = report.summary()
    assert summary["succeeded"] == 2
    assert summary["failed"] == 1
    assert summary["success_rate"] == 66.7
    assert [r["index"] for r in summary["results"]] == [1, 2, 3]


def test_confidence_only_counts_numeric_values():
    report = BatchReport()
    report.add(0, {"confianza": 90}, {"success": True})
    report.add(1, {"confianza": "75"}, {"success": True})
    report.add(2, {}, {"success": True})
    report.add(3, "not a record", {"success": False, "error": "listing must be a JSON object"})
    assert report.confidence_stats() == {"average": 82.5, "with_confidence": 2, "total": 4}


def test_log_summary_lists_failures(caplog):
    report = BatchReport()
    report.add(0, {}, {"success": False, "error": "could not resolve location 'Nowhere'"})
    report.add(1, {}, {"success": False, "errors": ["material is required", "telefono is required"]})
    with caplog.at_level(logging.INFO, logger="freight-ingest"):
        report.log_summary()
    text = caplog.text
    assert "0 succeeded, 2 failed, 2 processed" in text
    assert "Listing 1: could not resolve location 'Nowhere'" in text
    assert "Listing 2: material is required, telefono is required" in text
