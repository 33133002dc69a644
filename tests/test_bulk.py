from datetime import date

import pytest

from nicor_gas.bill_storage import FileStorage
from nicor_gas.bulk import bulk_locate
from nicor_gas.locator import BillLocator
from nicor_gas.models import FailureReason, PollingOptions, SessionCredential

from conftest import FakeFetcher, FakeStorage, auth_failed_response, pdf_response

ACCOUNT = "1234567890"


def run(fetcher, storage, start, end, options=None, credential=None):
    return bulk_locate(BillLocator(fetcher), start, end, ACCOUNT, "B-42",
                       credential or SessionCredential(), options=options, storage=storage)


def test_auth_failure_in_one_month_does_not_stop_batch():
    fetcher = FakeFetcher({
        date(2023, 1, 16): pdf_response(b"%PDF-jan"),
        date(2023, 2, 14): auth_failed_response(),
        date(2023, 3, 15): pdf_response(b"%PDF-mar"),
    })
    storage = FakeStorage()

    result = run(fetcher, storage, date(2023, 1, 1), date(2023, 3, 1))

    assert result.success
    assert [r.month for r in result.results] == [date(2023, 1, 1), date(2023, 2, 1), date(2023, 3, 1)]
    assert result.results[1].failure is FailureReason.AUTHENTICATION
    assert result.failed_months == [date(2023, 2, 1)]
    assert storage.saved == [
        (ACCOUNT, date(2023, 1, 16), b"%PDF-jan"),
        (ACCOUNT, date(2023, 3, 15), b"%PDF-mar"),
    ]
    assert len(result.errors) == 1
    # February stopped at its first request
    assert fetcher.requested.count(date(2023, 2, 14)) == 1
    assert not any(d.month == 2 and d.day > 14 for d in fetcher.requested)


def test_missing_months_are_recorded_and_skipped():
    fetcher = FakeFetcher({date(2023, 2, 18): pdf_response()})
    storage = FakeStorage()

    result = run(fetcher, storage, date(2023, 1, 1), date(2023, 3, 1))

    assert result.success
    assert result.downloaded_pdfs == [f"/bills/{ACCOUNT}-2023-02-18.pdf"]
    assert [r.failure for r in result.results] == [FailureReason.EXHAUSTED, None, FailureReason.EXHAUSTED]
    assert result.results[1].pdf_path == f"/bills/{ACCOUNT}-2023-02-18.pdf"


def test_nothing_found_is_not_success():
    result = run(FakeFetcher(), FakeStorage(), date(2023, 1, 1), date(2023, 2, 1))

    assert not result.success
    assert result.downloaded_pdfs == []
    assert len(result.errors) == 2


def test_storage_errors_propagate():
    fetcher = FakeFetcher({date(2023, 1, 14): pdf_response()})

    with pytest.raises(OSError):
        run(fetcher, FakeStorage(fail=True), date(2023, 1, 1), date(2023, 3, 1))


def test_saved_file_uses_resolved_date(tmp_path):
    fetcher = FakeFetcher({date(2023, 6, 19): pdf_response(b"%PDF-june")})

    result = run(fetcher, FileStorage(tmp_path), date(2023, 6, 1), date(2023, 6, 1),
                 options=PollingOptions(10, 25))

    saved = tmp_path / f"{ACCOUNT}-2023-06-19.pdf"
    assert result.downloaded_pdfs == [str(saved)]
    assert saved.read_bytes() == b"%PDF-june"


def test_empty_interval_does_nothing():
    fetcher = FakeFetcher()

    result = run(fetcher, FakeStorage(), date(2023, 5, 1), date(2023, 4, 1))

    assert result.results == []
    assert fetcher.requested == []
    assert not result.success


def test_stale_file_of_same_size_is_replaced(tmp_path):
    stale = tmp_path / f"{ACCOUNT}-2023-01-14.pdf"
    stale.write_bytes(b"%PDF-OLD!")
    fetcher = FakeFetcher({date(2023, 1, 14): pdf_response(b"%PDF-NEW!")})

    result = run(fetcher, FileStorage(tmp_path), date(2023, 1, 1), date(2023, 1, 1))

    assert result.downloaded_pdfs == [str(stale)]
    assert stale.read_bytes() == b"%PDF-NEW!"


def test_saved_bills_are_not_kept_in_memory():
    fetcher = FakeFetcher({
        date(2023, 1, 15): pdf_response(b"%PDF-jan"),
        date(2023, 2, 16): pdf_response(b"%PDF-february"),
    })

    result = run(fetcher, FakeStorage(), date(2023, 1, 1), date(2023, 2, 1))

    assert [r.content for r in result.results] == [None, None]
    assert [r.to_dict()["size"] for r in result.results] == [len(b"%PDF-jan"), len(b"%PDF-february")]
