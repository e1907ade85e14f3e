"""
Test rendering of JSONValue trees.

Verifies literals, layout, key handling and the date and data strategies.
"""

import json
import pytest
from datetime import datetime, timedelta, timezone

from ygson import (
    Formatter,
    JSONValue,
    Options,
    OutputFormatting,
    DateEncodingStrategy,
    DataEncodingStrategy,
    KeyEncodingStrategy,
    IndexKey,
    IntegerOverflowError,
    NonConformingFloatError,
    TextEncodingFailureError,
    UnsupportedCustomStrategyError,
    InvalidKeyError,
)


def render(value, **options) -> str:
    return Formatter(value, Options(**options)).write_json().decode('utf-8')


SAMPLE = JSONValue.object([
    ('a', JSONValue.array([JSONValue.text(s) for s in ['1', '2', '3']])),
    ('b', JSONValue.array([JSONValue.integer(i) for i in [4, 5, 6, 7, 8]])),
])


class TestPrimitives:
    """Test rendering of scalar values."""

    @pytest.mark.parametrize('value, expected', [
        (JSONValue.null(), 'null'),
        (JSONValue.boolean(True), 'true'),
        (JSONValue.boolean(False), 'false'),
        (JSONValue.integer(-12), '-12'),
        (JSONValue.integer(2 ** 63 - 1), str(2 ** 63 - 1)),
        (JSONValue.integer(-(2 ** 63)), str(-(2 ** 63))),
        (JSONValue.float(1.5), '1.5'),
        (JSONValue.float(4), '4.0'),
        (JSONValue.float(1e-7), '1e-07'),
        (JSONValue.text('plain'), '"plain"'),
    ])
    def test_literals(self, value, expected):
        assert render(value) == expected

    def test_text_escapes(self):
        rendered = render(JSONValue.text('quote" back\\ nl\n tab\t'))

        assert rendered == '"quote\\" back\\\\ nl\\n tab\\t"'
        assert json.loads(rendered) == 'quote" back\\ nl\n tab\t'

    def test_non_ascii_kept_by_default(self):
        assert render(JSONValue.text('café')) == '"café"'

    def test_ensure_ascii(self):
        assert render(JSONValue.text('café'), ensure_ascii=True) == '"caf\\u00e9"'

    @pytest.mark.parametrize('number', [float('nan'), float('inf'), float('-inf')])
    def test_non_finite_floats_rejected(self, number):
        with pytest.raises(NonConformingFloatError):
            render(JSONValue.array([JSONValue.float(number)]))

    @pytest.mark.parametrize('number', [2 ** 63, -(2 ** 63) - 1, 10 ** 5000],
                             ids=['2**63', '-(2**63)-1', '10**5000'])
    def test_integers_beyond_64_bits_rejected(self, number):
        with pytest.raises(IntegerOverflowError) as excinfo:
            render(JSONValue.array([JSONValue.integer(number)]))

        assert excinfo.value.coding_path == [IndexKey(0)]

    def test_lone_surrogate_fails_text_encoding(self):
        with pytest.raises(TextEncodingFailureError):
            render(JSONValue.text('\ud800'))


class TestLayout:
    """Test compact and pretty-printed layout."""

    def test_compact(self):
        assert render(SAMPLE) == '{"a":["1","2","3"],"b":[4,5,6,7,8]}'

    def test_pretty_printed(self):
        expected = (
            '{\n'
            '    "a": [\n'
            '        "1",\n'
            '        "2",\n'
            '        "3"\n'
            '    ],\n'
            '    "b": [\n'
            '        4,\n'
            '        5,\n'
            '        6,\n'
            '        7,\n'
            '        8\n'
            '    ]\n'
            '}'
        )
        assert render(SAMPLE, formatting=OutputFormatting.PRETTY_PRINTED) == expected

    def test_empty_composites(self):
        value = JSONValue.object([
            ('o', JSONValue.object([])),
            ('l', JSONValue.array([])),
        ])

        assert render(value) == '{"o":{},"l":[]}'
        assert render(value, formatting=OutputFormatting.PRETTY_PRINTED) == (
            '{\n    "o": {},\n    "l": []\n}'
        )

    def test_top_level_array_pretty(self):
        value = JSONValue.array([JSONValue.integer(1), JSONValue.array([JSONValue.null()])])

        assert render(value, formatting=OutputFormatting.PRETTY_PRINTED) == (
            '[\n    1,\n    [\n        null\n    ]\n]'
        )

    def test_duplicate_keys_rendered_in_order(self):
        value = JSONValue.object([('a', JSONValue.integer(1)), ('a', JSONValue.integer(2))])

        assert render(value) == '{"a":1,"a":2}'

    def test_formatter_is_reusable(self):
        formatter = Formatter(SAMPLE, Options())

        assert formatter.write_json() == formatter.write_json()


class TestKeys:
    """Test sorting and key encoding strategies."""

    def test_sorted_keys(self):
        value = JSONValue.object([
            (k, JSONValue.text(v)) for k, v in [('z', '1'), ('b', '2'), ('r', '3'), ('c', '4')]
        ])

        assert render(value, formatting=OutputFormatting.SORTED_KEYS) == (
            '{"b":"2","c":"4","r":"3","z":"1"}'
        )

    def test_sorted_keys_natural_and_nested(self):
        inner = JSONValue.object([('Beta', JSONValue.null()), ('alpha', JSONValue.null())])
        value = JSONValue.object([
            ('key10', JSONValue.integer(10)),
            ('key2', inner),
        ])

        assert render(value, formatting=OutputFormatting.SORTED_KEYS) == (
            '{"key2":{"alpha":null,"Beta":null},"key10":10}'
        )

    def test_sorted_keys_place_punctuation_before_digits(self):
        value = JSONValue.object([
            ('a1', JSONValue.integer(1)),
            ('a-', JSONValue.integer(2)),
            ('a.b', JSONValue.integer(3)),
        ])

        assert render(value, formatting=OutputFormatting.SORTED_KEYS) == (
            '{"a-":2,"a.b":3,"a1":1}'
        )

    def test_snake_case_keys(self):
        value = JSONValue.object([
            ('myURLProperty', JSONValue.object([('innerValue', JSONValue.integer(1))])),
        ])

        assert render(value, key_encoding=KeyEncodingStrategy.snake_case()) == (
            '{"my_url_property":{"inner_value":1}}'
        )

    def test_sorting_applies_to_converted_keys(self):
        value = JSONValue.object([
            ('zValue', JSONValue.integer(1)),
            ('z_a', JSONValue.integer(2)),
        ])
        rendered = render(
            value,
            formatting=OutputFormatting.SORTED_KEYS,
            key_encoding=KeyEncodingStrategy.snake_case(),
        )

        assert rendered == '{"z_a":2,"z_value":1}'

    def test_custom_key_callback_receives_path(self):
        seen = []

        def upper(path):
            seen.append(list(path))
            return path[-1].upper()

        value = JSONValue.object([
            ('outer', JSONValue.array([JSONValue.object([('inner', JSONValue.null())])])),
        ])
        rendered = render(value, key_encoding=KeyEncodingStrategy.custom(upper))

        assert rendered == '{"OUTER":[{"INNER":null}]}'
        assert seen[0] == ['outer']
        assert seen[1][0] == 'outer'
        assert seen[1][-1] == 'inner'

    def test_custom_key_callback_must_return_text(self):
        value = JSONValue.object([('a', JSONValue.null())])

        with pytest.raises(InvalidKeyError):
            render(value, key_encoding=KeyEncodingStrategy.custom(lambda path: None))


class TestDateStrategies:
    """Test date encoding strategies."""

    DATE = datetime(2019, 11, 4, 10, 30, 15, 500000, tzinfo=timezone.utc)

    def _render_date(self, strategy, date=None):
        return render(JSONValue.date(date or self.DATE), date_encoding=strategy)

    def test_deferred_uses_isoformat(self):
        assert self._render_date(DateEncodingStrategy.deferred_to_date()) == (
            '"2019-11-04T10:30:15.500000+00:00"'
        )

    def test_seconds_since_epoch(self):
        rendered = self._render_date(DateEncodingStrategy.seconds_since_epoch())
        assert json.loads(rendered) == self.DATE.timestamp()

    def test_milliseconds_since_epoch(self):
        rendered = self._render_date(DateEncodingStrategy.milliseconds_since_epoch())
        assert json.loads(rendered) == self.DATE.timestamp() * 1000.0

    def test_iso8601_drops_fraction_and_converts_to_utc(self):
        local = datetime(2019, 11, 4, 12, 30, 15, 999, tzinfo=timezone(timedelta(hours=2)))

        assert self._render_date(DateEncodingStrategy.iso8601(), local) == (
            '"2019-11-04T10:30:15Z"'
        )

    def test_naive_dates_are_utc(self):
        naive = datetime(1970, 1, 2)

        assert self._render_date(DateEncodingStrategy.iso8601(), naive) == '"1970-01-02T00:00:00Z"'
        assert self._render_date(DateEncodingStrategy.seconds_since_epoch(), naive) == '86400.0'

    def test_formatted(self):
        strategy = DateEncodingStrategy.formatted('%d/%m/%Y')
        assert self._render_date(strategy) == '"04/11/2019"'

    def test_custom_callback_writes_structure(self):
        def encode_date(date, context):
            container = context.make_keyed_container()
            container.encode('year', date.year)
            container.encode('month', date.month)

        rendered = self._render_date(DateEncodingStrategy.custom(encode_date))
        assert rendered == '{"year":2019,"month":11}'

    def test_custom_callback_writing_nothing_is_null(self):
        rendered = self._render_date(DateEncodingStrategy.custom(lambda date, context: None))
        assert rendered == 'null'


class TestDataStrategies:
    """Test binary data encoding strategies."""

    DATA = b'\x00\xffhello'

    def test_base64(self):
        rendered = render(JSONValue.data(self.DATA))
        assert rendered == '"AP9oZWxsbw=="'

    def test_raw_passthrough_into_bytes(self):
        value = JSONValue.array([JSONValue.data(b'"raw"')])
        output = Formatter(value, Options(data_encoding=DataEncodingStrategy.raw())).write_json()

        assert output == b'["raw"]'

    def test_raw_passthrough_refused_for_text(self):
        formatter = Formatter(JSONValue.data(self.DATA), Options(data_encoding=DataEncodingStrategy.raw()))

        with pytest.raises(UnsupportedCustomStrategyError):
            formatter.to_text()

    def test_raw_permission_is_decided_per_render(self):
        formatter = Formatter(JSONValue.data(b'1'), Options(data_encoding=DataEncodingStrategy.raw()))

        with pytest.raises(UnsupportedCustomStrategyError):
            formatter.to_text()
        assert formatter.write_json() == b'1'

    def test_raw_passthrough_refused_when_not_binary_safe(self):
        formatter = Formatter(
            JSONValue.data(self.DATA),
            Options(data_encoding=DataEncodingStrategy.raw()),
            binary_safe=False,
        )

        with pytest.raises(UnsupportedCustomStrategyError):
            formatter.write_json()

    def test_custom_callback(self):
        def as_hex(data, context):
            context.make_single_value_container().write_text(data.hex())

        rendered = render(JSONValue.data(self.DATA), data_encoding=DataEncodingStrategy.custom(as_hex))
        assert rendered == '"00ff68656c6c6f"'


class TestOptions:
    """Test option validation."""

    def test_wrong_strategy_type_is_rejected(self):
        with pytest.raises(UnsupportedCustomStrategyError):
            Options(date_encoding=DataEncodingStrategy.base64())

    def test_flags_combine(self):
        options = Options(formatting=OutputFormatting.PRETTY_PRINTED | OutputFormatting.SORTED_KEYS)

        assert options.pretty_printed
        assert options.sorted_keys
        assert not Options().pretty_printed
