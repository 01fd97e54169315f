# tests.py
"""
ТЕСТИРОВАНИЕ ПОЛЕЙ ВВОДА С МАСКОЙ
Движок масок, кодеки, курсор, синхронизация с хостом, формы и AJAX.
"""

from datetime import date, time
from decimal import Decimal

from django import forms
from django.template import Context, Template
from django.test import SimpleTestCase, override_settings
from django.urls import reverse

from .core.exceptions import UnknownFieldKindError
from .core.helpers import (
    format_amount_for_input,
    format_currency,
    format_date_display,
    format_time,
    is_end_time_after_start,
    parse_amount,
)
from .core.validators import (
    format_phone_display,
    normalize_phone,
    phone_validator,
    validate_uzbek_phone,
)
from .forms import LessonSlotForm, PaymentForm, StudentForm
from .services import (
    AmountKind,
    DateKind,
    MaskedField,
    MaskSpec,
    PhoneKind,
    TimeKind,
    TimePicker,
    Validity,
    accepts_key,
    extract_amount,
    format_mask,
    get_kind,
    group_thousands,
    translate_caret,
)

ODD_INPUTS = [
    '',
    'abc',
    '😀😀',
    '\x00\x07\n\t',
    '١٢٣٤',  # арабско-индийские цифры
    '++//::,,..',
    '12/03/2024 extra 999',
    ' ' * 50,
]


def type_keys(field, keys):
    """Набрать символы в позиции курсора, как это делает браузер."""
    for key in keys:
        display, caret = field.display, field.caret
        field.edit(display[:caret] + key + display[caret:], caret + 1)
    return field.state


# ==================== ИЗВЛЕЧЕНИЕ СИМВОЛОВ ====================

class ExtractorTestCase(SimpleTestCase):
    """Тесты очистки сырого ввода."""

    def test_date_keeps_only_digits(self):
        self.assertEqual(DateKind().extract('12a/03-2024xyz'), '12032024')

    def test_date_truncates_to_eight_digits(self):
        self.assertEqual(DateKind().extract('123456789'), '12345678')

    def test_time_truncates_to_four_digits(self):
        self.assertEqual(TimeKind().extract('09:30:45'), '0930')

    def test_extractors_are_total(self):
        for kind in (DateKind(), PhoneKind(), TimeKind()):
            for text in ODD_INPUTS:
                extracted = kind.extract(text)
                self.assertTrue(all(ch in '0123456789' for ch in extracted), (kind, text))
                self.assertLessEqual(len(extracted), kind.spec.max_digits)

        for text in ODD_INPUTS:
            extracted = AmountKind().extract(text)
            self.assertTrue(all(ch in '0123456789.' for ch in extracted), text)
            self.assertLessEqual(extracted.count('.'), 1)

    def test_extract_none(self):
        self.assertEqual(DateKind().extract(None), '')
        self.assertEqual(AmountKind().extract(None), '')

    def test_amount_normalizes_comma(self):
        self.assertEqual(extract_amount('12,5'), '12.5')
        self.assertEqual(extract_amount('1 234,5'), '1234.5')

    def test_amount_caps_fraction(self):
        self.assertEqual(extract_amount('12,345'), '12.34')

    def test_amount_extra_separators_are_noise(self):
        self.assertEqual(extract_amount('1.2.3'), '1.23')
        self.assertEqual(extract_amount('1,2,3'), '1.23')

    def test_amount_drops_letters_and_sign(self):
        self.assertEqual(extract_amount('-1a2b3 сум'), '123')
        self.assertEqual(extract_amount('abc'), '')

    def test_phone_country_code_is_dropped(self):
        kind = PhoneKind()
        self.assertEqual(kind.extract('998901234567'), '901234567')
        self.assertEqual(kind.extract('+998901234567'), '901234567')
        self.assertEqual(kind.extract('+998 90 123 45 67'), '901234567')
        self.assertEqual(kind.extract('998 90 123 45 67'), '901234567')
        self.assertEqual(kind.extract('901234567'), '901234567')

    def test_phone_partially_erased_prefix(self):
        self.assertEqual(PhoneKind().extract('+99 90 12'), '9012')

    def test_phone_space_after_plus(self):
        self.assertEqual(PhoneKind().extract('+ 998 90 123 45 67'), '901234567')
        self.assertEqual(PhoneKind().extract('+ 998 90'), '90')
        self.assertEqual(PhoneKind().extract('+ 90 123'), '90123')

    def test_phone_national_number_starting_with_998(self):
        self.assertEqual(PhoneKind().extract('998123456'), '998123456')
        self.assertEqual(PhoneKind().extract('99812'), '99812')

    def test_phone_truncates_to_national_length(self):
        self.assertEqual(PhoneKind().extract('9012345678999'), '901234567')


# ==================== ФОРМАТИРОВАНИЕ ПО МАСКЕ ====================

class MaskFormatterTestCase(SimpleTestCase):
    """Тесты вставки разделителей."""

    def test_date_spec(self):
        spec = MaskSpec.from_template('##/##/####')
        self.assertEqual(spec.digit_slots, (0, 1, 3, 4, 6, 7, 8, 9))
        self.assertEqual(spec.literals, {2: '/', 5: '/'})
        self.assertEqual(spec.max_digits, 8)
        self.assertEqual(spec.placeholder, 'XX/XX/XXXX')

    def test_date_progressive(self):
        kind = DateKind()
        expected = {
            '': '',
            '1': '1',
            '12': '12',
            '120': '12/0',
            '1203': '12/03',
            '12032': '12/03/2',
            '12032024': '12/03/2024',
        }
        for extracted, display in expected.items():
            self.assertEqual(kind.format(extracted), display)

    def test_no_trailing_separator(self):
        self.assertEqual(DateKind().format('1203'), '12/03')
        self.assertEqual(TimeKind().format('09'), '09')

    def test_display_always_matches_spec(self):
        kind = DateKind()
        digits = '12032024'
        for size in range(len(digits) + 1):
            self.assertTrue(kind.spec.matches(kind.format(digits[:size])))
        self.assertFalse(kind.spec.matches('12-03'))
        self.assertFalse(kind.spec.matches('12/03/20245'))

    def test_phone_grouping(self):
        kind = PhoneKind()
        self.assertEqual(kind.format('9'), '+998 9')
        self.assertEqual(kind.format('90'), '+998 90')
        self.assertEqual(kind.format('901'), '+998 90 1')
        self.assertEqual(kind.format('90123'), '+998 90 123')
        self.assertEqual(kind.format('901234567'), '+998 90 123 45 67')
        self.assertEqual(kind.format(''), '')

    def test_time_format(self):
        self.assertEqual(format_mask('093', TimeKind.spec), '09:3')
        self.assertEqual(format_mask('0930', TimeKind.spec), '09:30')

    def test_amount_grouping(self):
        self.assertEqual(group_thousands('1234567.5'), '1 234 567.5')
        self.assertEqual(group_thousands('123'), '123')
        self.assertEqual(group_thousands('1234'), '1 234')
        self.assertEqual(group_thousands('12.'), '12.')
        self.assertEqual(group_thousands('.5'), '.5')
        self.assertEqual(group_thousands(''), '')

    def test_amount_grouping_keeps_digit_order(self):
        display = AmountKind().format('9876543210.12')
        self.assertEqual(display.replace(' ', ''), '9876543210.12')


# ==================== ПЕРЕНОС КУРСОРА ====================

class CursorTestCase(SimpleTestCase):
    """Тесты позиции курсора после переформатирования."""

    def test_typing_last_date_digit(self):
        self.assertEqual(translate_caret('date', '12/03/2024', 10, '12/03/2024'), 10)

    def test_caret_skips_inserted_separator(self):
        self.assertEqual(translate_caret('date', '123', 3, '12/3'), 4)

    def test_typing_mid_string(self):
        # "12/0", курсор после "12", набрана "5"
        self.assertEqual(translate_caret('date', '125/0', 3, '12/50'), 4)

    def test_deleting_keeps_logical_position(self):
        # "12/03/2024", Backspace удаляет "3"
        self.assertEqual(translate_caret('date', '12/0/2024', 4, '12/02/024'), 4)

    def test_caret_at_start(self):
        self.assertEqual(translate_caret('date', '12/03', 0, '12/03'), 0)

    def test_empty_display(self):
        self.assertEqual(translate_caret('date', 'abc', 3, ''), 0)

    def test_phone_first_digit_lands_after_prefix(self):
        self.assertEqual(translate_caret('phone', '9', 1, '+998 9'), 6)

    def test_phone_caret_counts_only_national_digits(self):
        self.assertEqual(translate_caret('phone', '+998 90 1234', 12, '+998 90 123 4'), 13)
        self.assertEqual(translate_caret('phone', '+998 90 123', 5, '+998 90 123'), 5)

    def test_amount_caret_skips_group_separator(self):
        self.assertEqual(translate_caret('amount', '1234', 4, '1 234'), 5)
        self.assertEqual(translate_caret('amount', '19 234', 2, '19 234'), 2)

    def test_caret_always_within_display(self):
        raw = '+998 90 12a3 45 67 89'
        kind = PhoneKind()
        display = kind.format(kind.extract(raw))
        for caret in range(-2, len(raw) + 3):
            position = translate_caret(kind, raw, caret, display)
            self.assertGreaterEqual(position, 0)
            self.assertLessEqual(position, len(display))


# ==================== КЛАССИФИКАЦИЯ ====================

class ValidityTestCase(SimpleTestCase):
    """Тесты автомата валидности."""

    def classify(self, kind, text):
        return kind.classify(kind.extract(text))

    def test_date_calendar(self):
        kind = DateKind()
        self.assertIs(self.classify(kind, '31/02/2024'), Validity.INVALID)
        self.assertIs(self.classify(kind, '29/02/2024'), Validity.VALID)
        self.assertIs(self.classify(kind, '29/02/2023'), Validity.INVALID)
        self.assertIs(self.classify(kind, '31/04/2024'), Validity.INVALID)

    def test_date_ranges(self):
        kind = DateKind()
        self.assertIs(self.classify(kind, '00/01/2024'), Validity.INVALID)
        self.assertIs(self.classify(kind, '01/13/2024'), Validity.INVALID)
        self.assertIs(self.classify(kind, '01/01/1899'), Validity.INVALID)
        self.assertIs(self.classify(kind, '31/12/2100'), Validity.VALID)
        self.assertIs(self.classify(kind, '01/01/2101'), Validity.INVALID)

    def test_empty_and_partial_are_neutral(self):
        kind = DateKind()
        self.assertIs(self.classify(kind, ''), Validity.EMPTY)
        self.assertIs(self.classify(kind, '12/0'), Validity.PARTIAL)
        self.assertFalse(Validity.EMPTY.is_error)
        self.assertFalse(Validity.PARTIAL.is_error)
        self.assertTrue(Validity.INVALID.is_error)

    def test_phone_partial_until_complete(self):
        kind = PhoneKind()
        self.assertIs(self.classify(kind, '9012345'), Validity.PARTIAL)
        self.assertIs(self.classify(kind, '901234567'), Validity.VALID)

    def test_time(self):
        kind = TimeKind()
        self.assertIs(self.classify(kind, '23:59'), Validity.VALID)
        self.assertIs(self.classify(kind, '24:00'), Validity.INVALID)
        self.assertIs(self.classify(kind, '12:60'), Validity.INVALID)
        self.assertIs(self.classify(kind, '09'), Validity.PARTIAL)

    def test_amount(self):
        kind = AmountKind()
        self.assertIs(self.classify(kind, ''), Validity.EMPTY)
        self.assertIs(self.classify(kind, '.'), Validity.PARTIAL)
        self.assertIs(self.classify(kind, '0'), Validity.VALID)
        self.assertIs(self.classify(kind, '12.'), Validity.VALID)


# ==================== КОДЕКИ ====================

class CodecTestCase(SimpleTestCase):
    """Тесты канонических значений."""

    def assertRoundTrip(self, kind, values):
        for value in values:
            display = kind.format(kind.encode(value))
            self.assertEqual(kind.decode(kind.extract(display)), value, display)
            # format -> parse -> format
            self.assertEqual(kind.render(kind.parse(display)), display)

    def test_round_trips(self):
        self.assertRoundTrip(DateKind(), ['2024-02-29', '1900-01-01', '2100-12-31', '1999-07-15'])
        self.assertRoundTrip(PhoneKind(), ['901234567', '331112233', '998123456'])
        self.assertRoundTrip(TimeKind(), ['00:00', '23:55', '09:07'])
        self.assertRoundTrip(AmountKind(), [
            Decimal('1234567.5'),
            Decimal('0.01'),
            Decimal('12'),
            Decimal('12345678901234567890123456789.55'),
        ])

    def test_date_decode(self):
        kind = DateKind()
        self.assertEqual(kind.decode('29022024'), '2024-02-29')
        self.assertIsNone(kind.decode('31022024'))
        self.assertIsNone(kind.decode('1203'))

    def test_date_encode(self):
        kind = DateKind()
        self.assertEqual(kind.encode('2024-03-12'), '12032024')
        self.assertEqual(kind.encode('2024-03-12T10:00:00'), '12032024')
        self.assertEqual(kind.encode(date(2024, 3, 12)), '12032024')
        self.assertEqual(kind.encode('12/03/2024'), '12032024')
        self.assertEqual(kind.encode(None), '')

    def test_phone_international(self):
        kind = PhoneKind()
        self.assertEqual(kind.to_international('901234567'), '998901234567')
        self.assertEqual(kind.to_international(''), '')

    def test_time_encode(self):
        kind = TimeKind()
        self.assertEqual(kind.encode('9:05'), '0905')
        self.assertEqual(kind.encode('09:30:00'), '0930')
        self.assertEqual(kind.encode(time(9, 5)), '0905')
        self.assertEqual(kind.decode('0930'), '09:30')
        self.assertIsNone(kind.decode('2400'))

    def test_amount_decode(self):
        kind = AmountKind()
        self.assertEqual(kind.decode('1234567.5'), Decimal('1234567.5'))
        self.assertEqual(kind.decode('12.'), Decimal('12'))
        self.assertEqual(kind.decode('.5'), Decimal('0.5'))
        self.assertIsNone(kind.decode('.'))
        self.assertIsNone(kind.decode(''))

    def test_amount_encode(self):
        kind = AmountKind()
        self.assertEqual(kind.encode(12.5), '12.5')
        self.assertEqual(kind.encode(Decimal('1.005')), '1.01')
        self.assertEqual(kind.encode(-5), '5')
        self.assertEqual(kind.encode(0), '')
        self.assertEqual(kind.encode(None), '')
        self.assertEqual(kind.encode(float('inf')), '')
        self.assertEqual(kind.encode(float('nan')), '')

    def test_amount_encode_rounds_to_zero(self):
        kind = AmountKind()
        self.assertEqual(kind.encode(Decimal('1E-30')), '')
        self.assertEqual(kind.encode(1e-5), '')
        self.assertEqual(kind.render(Decimal('0.004')), '')

    def test_amount_encode_long_integer_part(self):
        kind = AmountKind()
        self.assertEqual(
            kind.encode(Decimal('-12345678901234567890123456789.55')),
            '12345678901234567890123456789.55',
        )
        self.assertEqual(
            kind.encode(Decimal('999999999999999999999999999999.995')),
            '1' + '0' * 30 + '.00',
        )

    def test_amount_blur_pads_fraction(self):
        kind = AmountKind()
        self.assertEqual(kind.blur('1234567.5'), '1234567.50')
        self.assertEqual(kind.blur('12'), '12.00')
        self.assertEqual(kind.blur('.5'), '0.50')
        self.assertEqual(kind.blur('0'), '')
        self.assertEqual(kind.blur('.'), '')

    def test_unknown_kind(self):
        with self.assertRaises(UnknownFieldKindError):
            get_kind('color')
        with self.assertRaises(UnknownFieldKindError):
            get_kind(None)


# ==================== ДВИЖОК ПОЛЯ ====================

class MaskedFieldTestCase(SimpleTestCase):
    """Тесты правок, потери фокуса и вызова on_change."""

    def setUp(self):
        self.changes = []

    def make(self, kind, value=''):
        return MaskedField(kind, value=value, on_change=self.changes.append)

    def test_typing_full_date(self):
        field = self.make('date')
        state = type_keys(field, '12032024')
        self.assertEqual(state.display, '12/03/2024')
        self.assertEqual(state.caret, 10)
        self.assertEqual(state.value, '2024-03-12')
        self.assertEqual(self.changes, ['2024-03-12'])

    def test_typing_last_digit(self):
        field = self.make('date')
        field.edit('12/03/202')
        state = field.edit('12/03/2024', 10)
        self.assertEqual(state.display, '12/03/2024')
        self.assertEqual(state.caret, 10)

    def test_typing_mid_string(self):
        field = self.make('date')
        field.edit('12/0')
        state = field.edit('125/0', 3)
        self.assertEqual(state.display, '12/50')
        self.assertEqual(state.caret, 4)

    def test_manual_separator_is_ignored(self):
        field = self.make('date')
        state = type_keys(field, '12/')
        self.assertEqual(state.display, '12')
        self.assertEqual(state.caret, 2)

    def test_invalid_date_is_not_emitted(self):
        field = self.make('date')
        state = field.edit('31/02/2024')
        self.assertIs(state.validity, Validity.INVALID)
        self.assertTrue(state.is_error)
        self.assertEqual(state.value, '')
        self.assertEqual(self.changes, [])

    def test_partials_are_not_emitted(self):
        field = self.make('date')
        type_keys(field, '1203')
        self.assertEqual(self.changes, [])

    def test_clearing_emits_empty_value(self):
        field = self.make('date')
        field.edit('12/03/2024')
        state = field.edit('')
        self.assertIs(state.validity, Validity.EMPTY)
        self.assertEqual(self.changes, ['2024-03-12', ''])

    def test_seeded_from_external_value(self):
        field = self.make('date', '2024-03-12')
        self.assertEqual(field.display, '12/03/2024')
        self.assertEqual(field.caret, 10)
        self.assertIs(field.validity, Validity.VALID)
        self.assertEqual(self.changes, [])

    def test_typing_phone(self):
        field = self.make('phone')
        state = type_keys(field, '901234567')
        self.assertEqual(state.display, '+998 90 123 45 67')
        self.assertEqual(state.caret, 17)
        self.assertEqual(self.changes, ['901234567'])

    def test_phone_both_forms_normalize(self):
        first = self.make('phone').edit('998901234567')
        second = self.make('phone').edit('901234567')
        self.assertEqual(first.display, '+998 90 123 45 67')
        self.assertEqual(first.display, second.display)
        self.assertEqual(first.value, '901234567')
        self.assertEqual(first.value, second.value)

    def test_phone_seven_digits_stays_partial(self):
        state = self.make('phone').edit('9012345')
        self.assertIs(state.validity, Validity.PARTIAL)
        self.assertEqual(state.value, '')
        self.assertEqual(self.changes, [])

    def test_amount_typing_and_blur(self):
        field = self.make('amount')
        state = type_keys(field, '1234567.5')
        self.assertEqual(state.display, '1 234 567.5')
        self.assertEqual(state.caret, len(state.display))
        self.assertEqual(state.value, Decimal('1234567.5'))

        state = field.blur()
        self.assertEqual(state.display, '1 234 567.50')
        self.assertEqual(field.numeric_value(), Decimal('1234567.5'))

    def test_amount_long_integer_part_seeded(self):
        value = Decimal('12345678901234567890123456789.55')
        field = self.make('amount', value)
        self.assertEqual(field.display, '12 345 678 901 234 567 890 123 456 789.55')
        self.assertEqual(field.value, value)

    def test_amount_comma(self):
        state = self.make('amount').edit('12,5')
        self.assertEqual(state.value, Decimal('12.5'))

    def test_amount_zero_cleared_on_blur(self):
        field = self.make('amount')
        field.edit('0')
        state = field.blur()
        self.assertEqual(state.display, '')
        self.assertEqual(self.changes[-1], '')
        self.assertEqual(field.numeric_value(), Decimal('0'))

    def test_blur_without_changes_does_not_emit(self):
        field = self.make('amount')
        field.edit('12.50')
        emitted = len(self.changes)
        field.blur()
        self.assertEqual(len(self.changes), emitted)

    def test_blur_keeps_date(self):
        field = self.make('date')
        field.edit('12/0')
        self.assertEqual(field.blur().display, '12/0')

    def test_caret_invariant(self):
        field = self.make('date')
        for raw, caret in [('1', 1), ('12345', 2), ('9/9/9/9/9', 9), ('', 0), ('x', 1)]:
            state = field.edit(raw, caret)
            self.assertGreaterEqual(state.caret, 0)
            self.assertLessEqual(state.caret, len(state.display))


# ==================== СИНХРОНИЗАЦИЯ С ХОСТОМ ====================

class SyncBridgeTestCase(SimpleTestCase):
    """Тесты применения внешних значений."""

    def setUp(self):
        self.changes = []

    def test_partial_edit_not_clobbered(self):
        field = MaskedField('date', on_change=self.changes.append)
        field.edit('12/0')
        self.assertFalse(field.receive('2024-05-12'))
        self.assertEqual(field.display, '12/0')

    def test_unchanged_value_ignored(self):
        field = MaskedField('date', value='')
        field.edit('12/0')
        self.assertFalse(field.receive(''))
        self.assertEqual(field.display, '12/0')

    def test_echo_of_emitted_value_ignored(self):
        field = MaskedField('date', on_change=self.changes.append)
        type_keys(field, '12032024')
        self.assertFalse(field.receive(self.changes[-1]))
        self.assertEqual(field.display, '12/03/2024')
        self.assertEqual(field.caret, 10)

    def test_echo_keeps_caret_mid_string(self):
        field = MaskedField('date', on_change=self.changes.append)
        field.edit('12/03/2024')
        field.edit('12/03/2024', 4)
        self.assertFalse(field.receive('2024-03-12'))
        self.assertEqual(field.caret, 4)

    def test_external_update_applied(self):
        field = MaskedField('date', value='2024-03-12', on_change=self.changes.append)
        self.assertTrue(field.receive('2025-01-31'))
        self.assertEqual(field.display, '31/01/2025')
        self.assertEqual(field.caret, 10)
        self.assertEqual(self.changes, [])

    def test_form_reset_applied(self):
        field = MaskedField('date', on_change=self.changes.append)
        field.edit('12/03/2024')
        self.assertTrue(field.receive(''))
        self.assertEqual(field.display, '')
        self.assertIs(field.validity, Validity.EMPTY)

    def test_reset_after_backspace(self):
        field = MaskedField('date', on_change=self.changes.append)
        field.edit('12/03/2024')
        field.edit('12/03/202')
        self.assertTrue(field.receive(''))
        self.assertEqual(field.display, '')

    def test_amount_echo_with_other_scale(self):
        field = MaskedField('amount', on_change=self.changes.append)
        field.edit('12.5')
        field.blur()
        self.assertFalse(field.receive(Decimal('12.5')))
        self.assertFalse(field.receive(12.5))
        self.assertEqual(field.display, '12.50')

    def test_phone_external_international(self):
        field = MaskedField('phone')
        self.assertTrue(field.receive('998901234567'))
        self.assertEqual(field.display, '+998 90 123 45 67')
        self.assertEqual(field.value, '901234567')

    def test_explicit_reset(self):
        field = MaskedField('phone', value='901234567', on_change=self.changes.append)
        state = field.reset()
        self.assertEqual(state.display, '')
        self.assertEqual(self.changes, [])

    def test_applied_update_is_logged(self):
        field = MaskedField('date', value='2024-03-12')
        with self.assertLogs('masking.services.engine', level='DEBUG') as logs:
            field.receive('2025-01-31')
        self.assertIn('external value applied', logs.output[0])


# ==================== КЛАВИАТУРА ====================

class KeyboardTestCase(SimpleTestCase):
    """Тесты фильтра нажатий клавиш."""

    def test_digits_pass(self):
        for kind in ('date', 'phone', 'amount', 'time'):
            self.assertTrue(accepts_key(kind, '5'))

    def test_letters_blocked(self):
        self.assertFalse(accepts_key('date', 'a'))
        self.assertFalse(accepts_key('phone', '+'))
        self.assertFalse(accepts_key('amount', '-'))

    def test_kind_specific_separators(self):
        self.assertTrue(accepts_key('date', '/'))
        self.assertFalse(accepts_key('phone', '/'))
        self.assertTrue(accepts_key('amount', ','))
        self.assertTrue(accepts_key('amount', '.'))
        self.assertFalse(accepts_key('date', '.'))

    def test_navigation_and_shortcuts(self):
        self.assertTrue(accepts_key('date', 'Backspace'))
        self.assertTrue(accepts_key('phone', 'ArrowLeft'))
        self.assertTrue(accepts_key('phone', 'v', ctrl=True))
        self.assertTrue(accepts_key('amount', 'c', meta=True))


# ==================== ВЫБОР ВРЕМЕНИ ====================

class FakeHandle:
    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class TimePickerTestCase(SimpleTestCase):
    """Тесты выбора времени."""

    def setUp(self):
        self.changes = []
        self.picker = TimePicker(on_change=self.changes.append)

    def test_options(self):
        self.assertEqual(len(self.picker.hour_options), 24)
        self.assertEqual(self.picker.minute_options[:3], ['00', '05', '10'])
        self.assertEqual(len(self.picker.minute_options), 12)

    def test_emits_only_complete_selection(self):
        self.picker.select_hour('09')
        self.assertEqual(self.changes, [])
        self.picker.select_minute('30')
        self.assertEqual(self.changes, ['09:30'])
        self.assertEqual(self.picker.value, '09:30')

    def test_clear_emits_empty(self):
        self.picker.select_hour(9)
        self.picker.select_minute(30)
        self.picker.clear()
        self.assertEqual(self.changes[-1], '')

    def test_invalid_selection_ignored(self):
        self.assertFalse(self.picker.select_hour(24))
        self.assertFalse(self.picker.select_minute('abc'))
        self.assertEqual(self.picker.value, '')

    def test_step_not_enforced_by_codec(self):
        self.picker.select_hour(9)
        self.assertTrue(self.picker.select_minute(7))
        self.assertEqual(self.picker.value, '09:07')

    def test_typed_segments_are_clamped(self):
        self.assertFalse(self.picker.type_hours('7'))
        self.assertEqual(self.picker.hours, '7')
        self.assertTrue(self.picker.type_hours('27'))
        self.assertEqual(self.picker.hours, '23')
        self.picker.type_minutes('75')
        self.assertEqual(self.picker.minutes, '59')
        self.assertEqual(self.changes[-1], '23:59')

    def test_arrows_wrap(self):
        self.picker.step_hours(-1)
        self.assertEqual(self.picker.hours, '23')
        self.picker.type_minutes('59')
        self.picker.step_minutes(1)
        self.assertEqual(self.picker.minutes, '00')

    def test_blur_pads(self):
        self.picker.type_hours('7')
        self.picker.type_minutes('5')
        self.picker.blur()
        self.assertEqual(self.picker.hours, '07')
        self.assertEqual(self.picker.minutes, '05')
        self.assertEqual(self.changes[-1], '07:05')

    def test_receive(self):
        self.assertTrue(self.picker.receive('09:30:00'))
        self.assertEqual(self.picker.value, '09:30')
        self.assertFalse(self.picker.receive('09:30'))
        self.assertEqual(self.changes, [])

    def test_repeated_value_keeps_partial_selection(self):
        picker = TimePicker('09:30')
        picker.type_minutes('')
        self.assertFalse(picker.receive('09:30'))
        self.assertEqual(picker.hours, '09')
        self.assertEqual(picker.minutes, '')

    def test_form_reset_clears_partial_selection(self):
        picker = TimePicker('09:30')
        picker.type_minutes('')
        self.assertTrue(picker.receive(''))
        self.assertEqual(picker.hours, '')
        self.assertEqual(picker.minutes, '')

    def test_new_value_replaces_partial_selection(self):
        picker = TimePicker('09:30')
        picker.type_minutes('')
        self.assertTrue(picker.receive('10:15'))
        self.assertEqual(picker.value, '10:15')

    def test_echo_of_emitted_value_ignored(self):
        self.picker.type_hours('7')
        self.picker.type_minutes('5')
        self.assertFalse(self.picker.receive('07:05'))
        self.assertEqual(self.picker.hours, '7')

    def test_seeded_from_time(self):
        self.assertEqual(TimePicker(time(14, 45)).value, '14:45')

    def test_open_schedules_scroll(self):
        calls = []
        scrolled = []
        handle = FakeHandle()

        def schedule(delay, callback):
            calls.append((delay, callback))
            return handle

        picker = TimePicker('09:37')
        picker.open(schedule, scrolled.append)
        self.assertEqual(calls[0][0], 0)
        calls[0][1]()
        self.assertEqual(scrolled, [('09', '35')])

    def test_unmount_cancels_scroll(self):
        handle = FakeHandle()
        picker = TimePicker('09:30')
        picker.open(lambda delay, callback: handle, lambda targets: None)
        picker.unmount()
        self.assertTrue(handle.cancelled)
        self.assertFalse(picker.is_open)

    @override_settings(MASKING={'TIME_MINUTE_STEP': 15})
    def test_step_from_settings(self):
        self.assertEqual(TimePicker().minute_options, ['00', '15', '30', '45'])


# ==================== ВАЛИДАТОРЫ И ХЕЛПЕРЫ ====================

class ValidatorsTestCase(SimpleTestCase):
    """Тесты валидаторов телефона."""

    def test_valid_phone(self):
        validate_uzbek_phone('+998 90 123 45 67')
        validate_uzbek_phone('')
        phone_validator('901234567')

    def test_short_phone(self):
        with self.assertRaises(forms.ValidationError):
            validate_uzbek_phone('+998 90 123')
        with self.assertRaises(forms.ValidationError):
            phone_validator('90123')

    def test_normalize_phone(self):
        self.assertEqual(normalize_phone('998901234567'), '901234567')
        self.assertEqual(normalize_phone('12345'), '')
        self.assertEqual(normalize_phone(None), '')

    def test_format_phone_display(self):
        self.assertEqual(format_phone_display('901234567'), '+998 90 123 45 67')
        self.assertEqual(format_phone_display('123'), '123')


class HelpersTestCase(SimpleTestCase):
    """Тесты хелперов форматирования."""

    def test_format_currency(self):
        self.assertEqual(format_currency(26000.5), '26 000.50')
        self.assertEqual(format_currency(Decimal('1234567')), '1 234 567.00')
        self.assertEqual(format_currency(-1500), '-1 500.00')
        self.assertEqual(format_currency('abc'), '0.00')

    def test_format_currency_long_integer_part(self):
        self.assertEqual(
            format_currency(Decimal('12345678901234567890123456789.555')),
            '12 345 678 901 234 567 890 123 456 789.56',
        )

    def test_format_amount_for_input(self):
        self.assertEqual(format_amount_for_input(0), '')
        self.assertEqual(format_amount_for_input(None), '')
        self.assertEqual(format_amount_for_input(1234.5), '1 234.50')

    def test_parse_amount(self):
        self.assertEqual(parse_amount('1 234,5'), Decimal('1234.5'))
        self.assertEqual(parse_amount('abc'), Decimal('0'))
        self.assertEqual(parse_amount(None), Decimal('0'))

    def test_format_time(self):
        self.assertEqual(format_time('09:30:00'), '09:30')
        self.assertEqual(format_time(time(7, 5)), '07:05')
        self.assertEqual(format_time(''), '')

    def test_end_time_after_start(self):
        self.assertTrue(is_end_time_after_start('09:00', '10:30'))
        self.assertFalse(is_end_time_after_start('10:00', '09:00'))
        self.assertFalse(is_end_time_after_start('10:00', '10:00'))
        self.assertTrue(is_end_time_after_start('', '09:00'))

    def test_format_date_display(self):
        self.assertEqual(format_date_display('2024-03-12'), '12/03/2024')
        self.assertEqual(format_date_display(date(2024, 3, 12)), '12/03/2024')
        self.assertEqual(format_date_display(''), '')
        self.assertEqual(format_date_display('not a date'), 'not a date')


# ==================== ФОРМЫ И ВИДЖЕТЫ ====================

class StudentFormTestCase(SimpleTestCase):
    """Тесты формы студента."""

    def data(self, **overrides):
        data = {
            'first_name': 'Ali',
            'last_name': 'Valiyev',
            'birth_date': '15/07/2010',
            'phone': '+998 90 123 45 67',
            'parent_phone': '',
        }
        data.update(overrides)
        return data

    def test_valid_form(self):
        form = StudentForm(data=self.data())
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['birth_date'], date(2010, 7, 15))
        self.assertEqual(form.cleaned_data['phone'], '901234567')
        self.assertEqual(form.cleaned_data['parent_phone'], '')

    def test_impossible_date(self):
        form = StudentForm(data=self.data(birth_date='31/02/2010'))
        self.assertFalse(form.is_valid())
        self.assertTrue(form.has_error('birth_date', code='invalid'))

    def test_incomplete_phone(self):
        form = StudentForm(data=self.data(phone='+998 90 12'))
        self.assertFalse(form.is_valid())
        self.assertTrue(form.has_error('phone', code='incomplete'))

    def test_future_birth_date(self):
        form = StudentForm(data=self.data(birth_date='01/01/2099'))
        self.assertFalse(form.is_valid())
        self.assertIn('birth_date', form.errors)

    def test_initial_values_rendered_with_mask(self):
        form = StudentForm(initial={'birth_date': date(2010, 7, 15), 'phone': '901234567'})
        birth_date = str(form['birth_date'])
        self.assertIn('value="15/07/2010"', birth_date)
        self.assertIn('data-mask="date"', birth_date)
        self.assertIn('maxlength="10"', birth_date)
        self.assertIn('placeholder="dd/mm/yyyy"', birth_date)

        phone = str(form['phone'])
        self.assertIn('type="tel"', phone)
        self.assertIn('value="+998 90 123 45 67"', phone)

    def test_invalid_value_marked(self):
        form = StudentForm(data=self.data(birth_date='31/02/2010'))
        html = str(form['birth_date'])
        self.assertIn('is-invalid', html)
        self.assertIn('value="31/02/2010"', html)

    def test_partial_value_not_marked(self):
        form = StudentForm(data=self.data(birth_date='12/0'))
        html = str(form['birth_date'])
        self.assertIn('value="12/0"', html)
        self.assertNotIn('is-invalid', html)


class PaymentFormTestCase(SimpleTestCase):
    """Тесты формы оплаты."""

    def test_valid_payment(self):
        form = PaymentForm(data={'amount': '1 234 567.5', 'paid_at': '12/03/2024', 'method': 'cash'})
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['amount'], Decimal('1234567.5'))
        self.assertEqual(form.cleaned_data['paid_at'], date(2024, 3, 12))

    def test_comma_amount(self):
        form = PaymentForm(data={'amount': '12,5', 'paid_at': '12/03/2024', 'method': 'card'})
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['amount'], Decimal('12.5'))

    def test_zero_amount(self):
        form = PaymentForm(data={'amount': '0', 'paid_at': '12/03/2024', 'method': 'cash'})
        self.assertFalse(form.is_valid())
        self.assertIn('amount', form.errors)

    def test_separator_only_amount(self):
        form = PaymentForm(data={'amount': '.', 'paid_at': '12/03/2024', 'method': 'cash'})
        self.assertFalse(form.is_valid())
        self.assertTrue(form.has_error('amount', code='incomplete'))

    def test_amount_initial_rendered(self):
        form = PaymentForm(initial={'amount': Decimal('1500.00')})
        self.assertIn('value="1 500.00"', str(form['amount']))


class LessonSlotFormTestCase(SimpleTestCase):
    """Тесты формы расписания с выбором времени."""

    def data(self, start=('09', '00'), end=('10', '30')):
        return {
            'start_time_hours': start[0],
            'start_time_minutes': start[1],
            'end_time_hours': end[0],
            'end_time_minutes': end[1],
        }

    def test_valid_slot(self):
        form = LessonSlotForm(data=self.data())
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['start_time'], time(9, 0))
        self.assertEqual(form.cleaned_data['end_time'], time(10, 30))

    def test_end_before_start(self):
        form = LessonSlotForm(data=self.data(start=('10', '00'), end=('09', '00')))
        self.assertFalse(form.is_valid())
        self.assertIn('end_time', form.errors)

    def test_only_hours_selected(self):
        form = LessonSlotForm(data=self.data(start=('09', '')))
        self.assertFalse(form.is_valid())
        self.assertTrue(form.has_error('start_time', code='incomplete'))

    def test_initial_selected(self):
        form = LessonSlotForm(initial={'start_time': time(9, 30)})
        html = str(form['start_time'])
        self.assertIn('name="start_time_hours"', html)
        self.assertIn('<option value="09" selected>', html)
        self.assertIn('<option value="30" selected>', html)


# ==================== AJAX ====================

class FieldViewsTestCase(SimpleTestCase):
    """Тесты AJAX-представлений."""

    def edit(self, kind, **data):
        return self.client.post(reverse('masking:field_edit', args=[kind]), data)

    def test_edit_date(self):
        response = self.edit('date', text='12/03/2024', caret='10')
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertTrue(payload['success'])
        self.assertEqual(payload['display'], '12/03/2024')
        self.assertEqual(payload['caret'], 10)
        self.assertEqual(payload['value'], '2024-03-12')
        self.assertEqual(payload['validity'], 'valid')
        self.assertFalse(payload['is_error'])

    def test_edit_invalid_date(self):
        payload = self.edit('date', text='31/02/2024').json()
        self.assertEqual(payload['validity'], 'invalid')
        self.assertTrue(payload['is_error'])
        self.assertEqual(payload['value'], '')

    def test_edit_default_caret(self):
        payload = self.edit('date', text='123').json()
        self.assertEqual(payload['display'], '12/3')
        self.assertEqual(payload['caret'], 4)

    def test_edit_amount(self):
        payload = self.edit('amount', text='1234567,5', caret='9').json()
        self.assertEqual(payload['display'], '1 234 567.5')
        self.assertEqual(Decimal(payload['value']), Decimal('1234567.5'))

    def test_unknown_kind(self):
        response = self.edit('color', text='1')
        self.assertEqual(response.status_code, 400)
        payload = response.json()
        self.assertFalse(payload['success'])
        self.assertEqual(payload['code'], 'unknown_kind')

    def test_edit_requires_post(self):
        response = self.client.get(reverse('masking:field_edit', args=['date']))
        self.assertEqual(response.status_code, 405)

    def test_format_phone(self):
        response = self.client.get(
            reverse('masking:field_format', args=['phone']),
            {'value': '998901234567'},
        )
        payload = response.json()
        self.assertEqual(payload['display'], '+998 90 123 45 67')
        self.assertEqual(payload['value'], '901234567')


# ==================== ШАБЛОНЫ И НАСТРОЙКИ ====================

class TemplateTagsTestCase(SimpleTestCase):
    """Тесты фильтров masking_tags."""

    def render(self, expression, value):
        template = Template('{% load masking_tags %}' + expression)
        return template.render(Context({'value': value}))

    def test_phone_format(self):
        self.assertEqual(self.render('{{ value|phone_format }}', '998901234567'), '+998 90 123 45 67')
        self.assertEqual(self.render('{{ value|phone_format }}', ''), '')

    def test_date_display(self):
        self.assertEqual(self.render('{{ value|date_display }}', '2024-03-12'), '12/03/2024')

    def test_format_amount(self):
        self.assertEqual(self.render('{{ value|format_amount }}', 26000.5), '26 000.50')
        self.assertEqual(self.render('{{ value|format_amount }}', None), '—')

    def test_time_display(self):
        self.assertEqual(self.render('{{ value|time_display }}', '09:30:00'), '09:30')


class SettingsTestCase(SimpleTestCase):
    """Тесты настроек MASKING."""

    @override_settings(MASKING={'AMOUNT_GROUP_SEPARATOR': '\u2009'})
    def test_thin_space_separator(self):
        field = MaskedField('amount')
        state = field.edit('1234', 4)
        self.assertEqual(state.display, '1\u2009234')
        self.assertEqual(state.caret, 5)

    @override_settings(MASKING={'DATE_MIN_YEAR': 2000})
    def test_date_year_bounds(self):
        self.assertIs(MaskedField('date').edit('01/01/1999').validity, Validity.INVALID)
