"""
Tests for the campaign draft business rules.
"""

import pytest

from campaign_creation.app.domain.draft import CampaignDraft, MediaAsset, TimeSlot
from campaign_creation.app.domain.rules import validate_campaign_draft
from campaign_creation.app.domain.state import ValidationErrorCode


def _codes(draft: CampaignDraft) -> list[ValidationErrorCode]:
    return [error.code for error in validate_campaign_draft(draft)]


def _with_slots(draft: CampaignDraft, *slots: tuple[str, str]) -> CampaignDraft:
    return draft.model_copy(
        update={'time_slots': tuple(TimeSlot(start_time=s, end_time=e) for s, e in slots)}
    )


def _with_media(draft: CampaignDraft, **changes) -> CampaignDraft:
    return draft.model_copy(update={'media_asset': draft.media_asset.model_copy(update=changes)})


def test_valid_draft_has_no_errors(valid_draft):
    assert validate_campaign_draft(valid_draft) == []


def test_validation_does_not_modify_the_draft(valid_draft):
    before = valid_draft.model_dump()
    validate_campaign_draft(valid_draft)
    assert valid_draft.model_dump() == before


class TestName:
    @pytest.mark.parametrize('name', ['', '   ', '\t\n'])
    def test_blank_name(self, valid_draft, name):
        assert _codes(valid_draft.model_copy(update={'name': name})) == [
            ValidationErrorCode.EMPTY_NAME
        ]

    def test_name_with_surrounding_whitespace_is_accepted(self, valid_draft):
        assert _codes(valid_draft.model_copy(update={'name': '  Summer  '})) == []


class TestDateRange:
    @pytest.mark.parametrize(
        ('start_date', 'end_date'),
        [
            ('not-a-date', '2026-06-30T23:59:59Z'),
            ('2026-06-01T00:00:00Z', ''),
            ('2026-13-01T00:00:00Z', '2026-06-30T23:59:59Z'),
        ],
    )
    def test_unparseable_dates(self, valid_draft, start_date, end_date):
        draft = valid_draft.model_copy(update={'start_date': start_date, 'end_date': end_date})
        assert _codes(draft) == [ValidationErrorCode.INVALID_DATE_FORMAT]

    def test_unparseable_date_skips_range_check(self, valid_draft):
        draft = valid_draft.model_copy(update={'start_date': 'garbage', 'end_date': 'garbage'})
        assert ValidationErrorCode.INVALID_DATE_RANGE not in _codes(draft)

    def test_start_after_end(self, valid_draft):
        draft = valid_draft.model_copy(
            update={'start_date': '2026-06-30T00:00:00Z', 'end_date': '2026-06-01T00:00:00Z'}
        )
        assert _codes(draft) == [ValidationErrorCode.INVALID_DATE_RANGE]

    def test_equal_dates_are_rejected(self, valid_draft):
        draft = valid_draft.model_copy(
            update={'start_date': '2026-06-01T00:00:00Z', 'end_date': '2026-06-01T00:00:00Z'}
        )
        assert _codes(draft) == [ValidationErrorCode.INVALID_DATE_RANGE]

    def test_offsets_are_taken_into_account(self, valid_draft):
        # 02:00+02:00 is midnight UTC, one hour before 01:00Z
        draft = valid_draft.model_copy(
            update={'start_date': '2026-06-01T02:00:00+02:00', 'end_date': '2026-06-01T01:00:00Z'}
        )
        assert _codes(draft) == []

    def test_naive_and_aware_timestamps_compare(self, valid_draft):
        draft = valid_draft.model_copy(
            update={'start_date': '2026-06-01', 'end_date': '2026-06-02T00:00:00+00:00'}
        )
        assert _codes(draft) == []


class TestScreenSelection:
    def test_empty_screen_selection(self, valid_draft):
        draft = valid_draft.model_copy(update={'screen_ids': ()})
        assert _codes(draft) == [ValidationErrorCode.EMPTY_SCREEN_SELECTION]

    def test_placeholder_screen_counts_as_a_selection(self, valid_draft):
        draft = valid_draft.model_copy(update={'screen_ids': ('',)})
        assert _codes(draft) == []


class TestTimeSlots:
    @pytest.mark.parametrize(
        ('start', 'end'),
        [('25:00', '26:00'), ('08:60', '09:00'), ('8:00', '09:00'), ('08:00', 'noon'), ('', '')],
    )
    def test_malformed_slot(self, valid_draft, start, end):
        assert _codes(_with_slots(valid_draft, (start, end))) == [
            ValidationErrorCode.INVALID_TIME_FORMAT
        ]

    @pytest.mark.parametrize(('start', 'end'), [('12:00', '08:00'), ('10:00', '10:00')])
    def test_slot_must_end_after_it_starts(self, valid_draft, start, end):
        assert _codes(_with_slots(valid_draft, (start, end))) == [
            ValidationErrorCode.INVALID_TIME_FORMAT
        ]

    def test_each_malformed_slot_is_reported(self, valid_draft):
        draft = _with_slots(valid_draft, ('25:00', '12:00'), ('09:00', '10:00'), ('14:00', '13:00'))
        assert _codes(draft) == [ValidationErrorCode.INVALID_TIME_FORMAT] * 2

    def test_overlapping_slots(self, valid_draft):
        draft = _with_slots(valid_draft, ('08:00', '12:00'), ('11:00', '15:00'))
        assert _codes(draft) == [ValidationErrorCode.OVERLAPPING_TIME_SLOTS]

    def test_touching_slots_do_not_overlap(self, valid_draft):
        draft = _with_slots(valid_draft, ('08:00', '12:00'), ('12:00', '15:00'))
        assert _codes(draft) == []

    def test_overlap_is_found_regardless_of_input_order(self, valid_draft):
        draft = _with_slots(valid_draft, ('18:00', '20:00'), ('11:00', '15:00'), ('08:00', '12:00'))
        errors = validate_campaign_draft(draft)
        assert [error.code for error in errors] == [ValidationErrorCode.OVERLAPPING_TIME_SLOTS]
        assert '08:00-12:00' in errors[0].message
        assert '11:00-15:00' in errors[0].message

    def test_one_error_per_overlapping_adjacent_pair(self, valid_draft):
        draft = _with_slots(valid_draft, ('08:00', '10:00'), ('09:00', '11:00'), ('10:30', '12:00'))
        assert _codes(draft) == [ValidationErrorCode.OVERLAPPING_TIME_SLOTS] * 2

    def test_overlap_detection_skipped_when_a_slot_is_malformed(self, valid_draft):
        draft = _with_slots(valid_draft, ('08:00', '12:00'), ('11:00', '15:00'), ('99:00', '10:00'))
        assert _codes(draft) == [ValidationErrorCode.INVALID_TIME_FORMAT]

    def test_no_slots(self, valid_draft):
        assert _codes(_with_slots(valid_draft)) == []


class TestMediaAsset:
    def test_size_at_limit_is_accepted(self, valid_draft):
        assert _codes(_with_media(valid_draft, size_in_mb=50)) == []

    def test_size_above_limit(self, valid_draft):
        assert _codes(_with_media(valid_draft, size_in_mb=50.0001)) == [
            ValidationErrorCode.MEDIA_SIZE_EXCEEDS_LIMIT
        ]

    def test_type_not_allowed(self, valid_draft):
        assert _codes(_with_media(valid_draft, type='audio')) == [
            ValidationErrorCode.MEDIA_TYPE_NOT_ALLOWED
        ]

    def test_video_is_allowed(self, valid_draft):
        assert _codes(_with_media(valid_draft, type='video')) == []

    def test_size_and_type_fire_together(self, valid_draft):
        assert _codes(_with_media(valid_draft, type='gif', size_in_mb=51)) == [
            ValidationErrorCode.MEDIA_SIZE_EXCEEDS_LIMIT,
            ValidationErrorCode.MEDIA_TYPE_NOT_ALLOWED,
        ]


def test_errors_follow_rule_order():
    draft = CampaignDraft(
        name=' ',
        start_date='2026-06-02T00:00:00Z',
        end_date='2026-06-01T00:00:00Z',
        screen_ids=(),
        time_slots=(
            TimeSlot(start_time='08:00', end_time='12:00'),
            TimeSlot(start_time='11:00', end_time='15:00'),
        ),
        media_asset=MediaAsset(url='https://example.com/a.ogg', type='audio', size_in_mb=80),
    )

    assert _codes(draft) == [
        ValidationErrorCode.EMPTY_NAME,
        ValidationErrorCode.INVALID_DATE_RANGE,
        ValidationErrorCode.EMPTY_SCREEN_SELECTION,
        ValidationErrorCode.OVERLAPPING_TIME_SLOTS,
        ValidationErrorCode.MEDIA_SIZE_EXCEEDS_LIMIT,
        ValidationErrorCode.MEDIA_TYPE_NOT_ALLOWED,
    ]


def test_identical_errors_are_not_deduplicated(valid_draft):
    draft = _with_slots(valid_draft, ('aa:bb', '10:00'), ('aa:bb', '10:00'))
    errors = validate_campaign_draft(draft)
    assert len(errors) == 2
    assert errors[0] == errors[1]
