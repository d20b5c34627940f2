from datetime import date, datetime

from studio_books.domain.records.engine import (
    ASC,
    DESC,
    RecordView,
    SortSpec,
    apply_filters,
    apply_search,
    compare_values,
    compute_view,
)
from studio_books.domain.records.predicates import PAYMENT_STATUSES, matches, payment_status_bucket


def make_events():
    return [
        {"id": "e1", "title": "Sharma Wedding", "event_type": "Wedding", "venue": "Jaipur", "event_date": "2024-03-10", "total_amount": 50000},
        {"id": "e2", "title": "Rao Ring Ceremony", "event_type": "Ring-Ceremony", "venue": "Pune", "event_date": "2024-01-05", "total_amount": 20000},
        {"id": "e3", "title": "Kapoor Pre Wedding", "event_type": "Pre-Wedding", "venue": None, "event_date": "2024-02-20", "total_amount": None},
    ]


def ids(records):
    return [r["id"] for r in records]


def test_search_is_case_insensitive_and_skips_missing_fields():
    records = make_events()

    assert ids(apply_search(records, "jaipur", ["title", "venue"])) == ["e1"]
    assert ids(apply_search(records, "WEDDING", ["title", "venue"])) == ["e1", "e3"]
    assert ids(apply_search(records, "   ", ["title"])) == ["e1", "e2", "e3"]


def test_event_type_filter_accepts_synonyms():
    records = make_events()

    assert ids(apply_filters(records, {"event_type": "ring ceremony"})) == ["e2"]
    assert ids(apply_filters(records, {"event_type": "pre_wedding"})) == ["e3"]
    assert ids(apply_filters(records, {"event_type": ["Wedding", "ring-ceremony"]})) == ["e1", "e2"]


def test_empty_filters_are_ignored():
    records = make_events()

    assert ids(apply_filters(records, {"event_type": "", "venue": None, "role": []})) == ["e1", "e2", "e3"]


def test_pass_through_keys_never_drop_records():
    records = make_events()

    filtered = apply_filters(records, {"status": "closed", "date_range": "last_week", "client_id": "c-9"})

    assert ids(filtered) == ["e1", "e2", "e3"]


def test_role_filter_is_case_insensitive():
    staff = [{"id": "s1", "role": "Photographer"}, {"id": "s2", "role": "Editor"}]

    assert ids(apply_filters(staff, {"role": "photographer"})) == ["s1"]
    assert ids(apply_filters(staff, {"role": ["EDITOR", "videographer"]})) == ["s2"]


def test_payment_status_buckets_partition_every_pair():
    cases = {
        (0, 0): "no_earnings",
        (0, 100): "overpaid",
        (1000, 1200): "overpaid",
        (1000, 1000): "fully_paid",
        (1000, 0): "pending_payment",
        (1000, 400): "partial_paid",
    }
    for (earnings, paid), expected in cases.items():
        assert payment_status_bucket(earnings, paid) == expected

    record = {"total_earnings": 1000, "paid_amount": 400}
    matching = [status for status in PAYMENT_STATUSES if matches("payment_status", record, status)]
    assert matching == ["partial_paid"]


def test_payment_status_passes_records_without_earnings():
    assert matches("payment_status", {"id": "x"}, "fully_paid")
    assert matches("payment_status", {"total_earnings": 10, "paid_amount": 0}, "unknown_token")


def test_earning_and_assignment_bands():
    staff = [
        {"id": "a", "total_earnings": 9999, "total_assignments": 0},
        {"id": "b", "total_earnings": 10000, "total_assignments": 5},
        {"id": "c", "total_earnings": 100000, "total_assignments": 15},
        {"id": "d", "total_earnings": 100001, "total_assignments": 16},
    ]

    assert ids(apply_filters(staff, {"earning_range": "under_10k"})) == ["a"]
    assert ids(apply_filters(staff, {"earning_range": "10k_50k"})) == ["b"]
    assert ids(apply_filters(staff, {"earning_range": "50k_100k"})) == ["c"]
    assert ids(apply_filters(staff, {"earning_range": "above_100k"})) == ["d"]
    assert ids(apply_filters(staff, {"assignment_count": "no_assignments"})) == ["a"]
    assert ids(apply_filters(staff, {"assignment_count": "1_5"})) == ["b"]
    assert ids(apply_filters(staff, {"assignment_count": "6_15"})) == ["c"]
    assert ids(apply_filters(staff, {"assignment_count": "above_15"})) == ["d"]


def test_freelancer_band_boundaries():
    earnings = [{"id": str(amount), "total_earnings": amount} for amount in (4999, 5000, 25000, 75000, 75001)]
    assignments = [{"id": str(count), "total_assignments": count} for count in (0, 3, 4, 10, 11)]

    assert ids(apply_filters(earnings, {"earning_range": "under_5k"})) == ["4999"]
    assert ids(apply_filters(earnings, {"earning_range": "5k_25k"})) == ["5000", "25000"]
    assert ids(apply_filters(earnings, {"earning_range": "25k_75k"})) == ["25000", "75000"]
    assert ids(apply_filters(earnings, {"earning_range": "above_75k"})) == ["75001"]
    assert ids(apply_filters(assignments, {"assignment_count": "no_assignments"})) == ["0"]
    assert ids(apply_filters(assignments, {"assignment_count": "1_3"})) == ["3"]
    assert ids(apply_filters(assignments, {"assignment_count": "4_10"})) == ["4", "10"]
    assert ids(apply_filters(assignments, {"assignment_count": "above_10"})) == ["11"]


def test_numeric_string_fields_are_parsed_for_composite_filters():
    records = [
        {"id": "a", "total_earnings": "20000", "paid_amount": "5000", "total_assignments": "3", "total_tasks": "3", "completed_tasks": "3"},
        {"id": "b", "total_earnings": "1,250.50", "paid_amount": "n/a", "total_assignments": "", "total_tasks": None, "completed_tasks": None},
    ]

    assert ids(apply_filters(records, {"earning_range": "10k_50k"})) == ["a"]
    assert ids(apply_filters(records, {"earning_range": "under_10k"})) == ["b"]
    assert ids(apply_filters(records, {"payment_status": "partial_paid"})) == ["a"]
    assert ids(apply_filters(records, {"payment_status": "pending_payment"})) == ["b"]
    assert ids(apply_filters(records, {"payment_status": "no_earnings"})) == []
    assert ids(apply_filters(records, {"assignment_count": "1_5"})) == ["a"]
    assert ids(apply_filters(records, {"assignment_count": "no_assignments"})) == ["b"]
    assert ids(apply_filters(records, {"task_completion": "all_completed"})) == ["a"]
    assert ids(apply_filters(records, {"task_completion": "no_tasks"})) == ["b"]


def test_task_completion_filter():
    staff = [
        {"id": "done", "total_tasks": 3, "completed_tasks": 3},
        {"id": "open", "total_tasks": 3, "completed_tasks": 1},
        {"id": "idle", "total_tasks": 0, "completed_tasks": 0},
    ]

    assert ids(apply_filters(staff, {"task_completion": "all_completed"})) == ["done"]
    assert ids(apply_filters(staff, {"task_completion": "pending_tasks"})) == ["open"]
    assert ids(apply_filters(staff, {"task_completion": "no_tasks"})) == ["idle"]


def test_mix_mode_both_keeps_everything():
    records = [{"id": "1", "mix_mode": "staff"}, {"id": "2", "mix_mode": "freelancer"}]

    assert ids(apply_filters(records, {"mix_mode": "both"})) == ["1", "2"]
    assert ids(apply_filters(records, {"mix_mode": "staff"})) == ["1"]


def test_date_filter_matches_calendar_day():
    payments = [
        {"id": "p1", "payment_date": datetime(2024, 3, 10, 18, 30)},
        {"id": "p2", "payment_date": "2024-03-11"},
    ]

    assert ids(apply_filters(payments, {"payment_date": "2024-03-10"})) == ["p1"]
    assert ids(apply_filters(payments, {"payment_date": date(2024, 3, 11)})) == ["p2"]


def test_generic_filter_uses_substring_and_list_membership():
    expenses = [
        {"id": "x1", "category": "Equipment Rental"},
        {"id": "x2", "category": "Travel"},
    ]

    assert ids(apply_filters(expenses, {"category": "rental"})) == ["x1"]
    assert ids(apply_filters(expenses, {"category": ["Travel"]})) == ["x2"]


def test_numeric_sort_puts_nulls_last_in_both_directions():
    records = make_events()

    ascending = compute_view(records, "", [], SortSpec("total_amount", ASC))
    descending = compute_view(records, "", [], SortSpec("total_amount", DESC))

    assert ids(ascending) == ["e2", "e1", "e3"]
    assert ids(descending) == ["e1", "e2", "e3"]


def test_date_sort_orders_by_parsed_date():
    records = make_events()

    assert ids(compute_view(records, "", [], SortSpec("event_date", ASC))) == ["e2", "e3", "e1"]
    assert ids(compute_view(records, "", [], SortSpec("event_date", DESC))) == ["e1", "e3", "e2"]


def test_invalid_dates_rank_above_valid_ones():
    assert compare_values("event_date", "not a date", "2024-01-01", ascending=True) == 1
    assert compare_values("event_date", "not a date", "2024-01-01", ascending=False) == -1
    assert compare_values("event_date", "2024-01-01", "garbage", ascending=True) == -1


def test_string_sort_is_case_insensitive():
    records = [{"id": "1", "name": "banana"}, {"id": "2", "name": "Apple"}, {"id": "3", "name": "cherry"}]

    assert ids(compute_view(records, "", [], SortSpec("name", ASC))) == ["2", "1", "3"]


def test_compute_view_does_not_mutate_input_and_is_idempotent():
    records = make_events()
    snapshot = list(records)

    first = compute_view(records, "wedding", ["title"], SortSpec("total_amount", DESC), {"venue": "a"})
    second = compute_view(records, "wedding", ["title"], SortSpec("total_amount", DESC), {"venue": "a"})

    assert records == snapshot
    assert ids(first) == ids(second) == ["e1"]


def test_record_view_recomputes_on_input_changes():
    view = RecordView(make_events(), ["title", "venue"], default_sort="event_date")

    assert view.current_sort == "event_date"
    assert view.sort_direction == DESC
    assert ids(view.filtered_and_sorted_data) == ["e1", "e3", "e2"]

    view.handle_sort_direction_toggle()
    assert view.sort_direction == ASC
    assert ids(view.filtered_and_sorted_data) == ["e2", "e3", "e1"]

    view.set_search_value("pune")
    assert ids(view.filtered_and_sorted_data) == ["e2"]

    view.set_search_value("")
    view.handle_filter_change({"event_type": "wedding"})
    assert ids(view.filtered_and_sorted_data) == ["e1"]

    view.handle_filter_change({})
    view.handle_sort_change("total_amount")
    assert view.sort_direction == ASC
    assert ids(view.filtered_and_sorted_data) == ["e2", "e1", "e3"]

    view.set_data([{"id": "new", "title": "Fresh", "total_amount": 1}])
    assert ids(view.filtered_and_sorted_data) == ["new"]
