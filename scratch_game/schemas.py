from types import MappingProxyType

from marshmallow import Schema, fields, ValidationError, pre_load, post_load, validates_schema
from marshmallow.validate import OneOf, Range, Length, Regexp

from .models import (  # Relative import
    BonusImpact, CellWeights, CombinationType, GameConfig, Symbol, SymbolType, WinCombination
)

COORDINATE_PATTERN = r'^\d+:\d+$'


def parse_coordinate(value):
    """Turns a "row:column" cell reference into a (row, column) tuple."""
    try:
        row, column = value.split(':')
        return int(row), int(column)
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid cell reference '{value}'. Expected 'row:column'.")


class SymbolSchema(Schema):
    reward_multiplier = fields.Float(load_default=0.0, validate=Range(min=0))
    type = fields.Str(required=True, validate=OneOf([t.value for t in SymbolType]))
    impact = fields.Str(load_default=BonusImpact.NONE.value, validate=OneOf([i.value for i in BonusImpact]))
    extra = fields.Float(load_default=None, allow_none=True, validate=Range(min=0))

    @validates_schema
    def validate_bonus_attributes(self, data, **kwargs):
        if data.get('type') == SymbolType.STANDARD.value and data.get('impact') != BonusImpact.NONE.value:
            raise ValidationError('Standard symbols cannot declare a bonus impact.', 'impact')
        if data.get('impact') == BonusImpact.EXTRA_BONUS.value and data.get('extra') is None:
            raise ValidationError("'extra' is required for extra_bonus symbols.", 'extra')


class CellWeightsSchema(Schema):
    row = fields.Int(required=True, strict=True, validate=Range(min=0))
    column = fields.Int(required=True, strict=True, validate=Range(min=0))
    symbols = fields.Dict(
        keys=fields.Str(),
        values=fields.Int(strict=True),
        required=True,
        validate=Length(min=1, error='At least one weighted symbol is required per cell.')
    )


class ProbabilitiesSchema(Schema):
    standard_symbols = fields.List(fields.Nested(CellWeightsSchema), required=True)
    bonus_symbols = fields.Dict(keys=fields.Str(), values=fields.Int(strict=True), load_default=dict)

    @pre_load
    def unwrap_bonus_symbols(self, data, **kwargs):
        """Accepts bonus weights either bare or wrapped as {"symbols": {...}}."""
        bonus = data.get('bonus_symbols') if isinstance(data, dict) else None
        if isinstance(bonus, dict) and set(bonus.keys()) == {'symbols'} and isinstance(bonus['symbols'], dict):
            data = dict(data)
            data['bonus_symbols'] = bonus['symbols']
        return data


class WinCombinationSchema(Schema):
    reward_multiplier = fields.Float(required=True, validate=Range(min=0))
    when = fields.Str(required=True, validate=OneOf([c.value for c in CombinationType]))
    count = fields.Int(load_default=None, allow_none=True, strict=True, validate=Range(min=1))
    group = fields.Str(load_default=None, allow_none=True)
    covered_areas = fields.List(
        fields.List(fields.Str(validate=Regexp(COORDINATE_PATTERN, error="Cell reference must look like 'row:column'."))),
        load_default=list
    )

    @validates_schema
    def validate_combination_shape(self, data, **kwargs):
        if data.get('when') == CombinationType.SAME_SYMBOLS.value and data.get('count') is None:
            raise ValidationError("'count' is required for same_symbols combinations.", 'count')
        for area in data.get('covered_areas') or []:
            if not area:
                raise ValidationError('Covered areas cannot be empty.', 'covered_areas')


class GameConfigSchema(Schema):
    """Deserializes a game configuration document into a GameConfig."""
    rows = fields.Int(required=True, strict=True, validate=Range(min=1))
    columns = fields.Int(required=True, strict=True, validate=Range(min=1))
    symbols = fields.Dict(
        keys=fields.Str(),
        values=fields.Nested(SymbolSchema),
        required=True,
        validate=Length(min=1)
    )
    probabilities = fields.Nested(ProbabilitiesSchema, required=True)
    win_combinations = fields.Dict(keys=fields.Str(), values=fields.Nested(WinCombinationSchema), load_default=dict)

    @post_load
    def make_game_config(self, data, **kwargs):
        probabilities = data['probabilities']
        symbols = tuple(
            Symbol(
                name=name,
                reward_multiplier=attrs['reward_multiplier'],
                type=SymbolType(attrs['type']),
                impact=BonusImpact(attrs['impact']),
                extra=attrs['extra'] if attrs['extra'] is not None else 0.0,
            )
            for name, attrs in data['symbols'].items()
        )
        standard_symbols = tuple(
            CellWeights(row=cell['row'], column=cell['column'], symbols=MappingProxyType(dict(cell['symbols'])))
            for cell in probabilities['standard_symbols']
        )
        win_combinations = []
        for name, attrs in data['win_combinations'].items():
            try:
                covered_areas = tuple(
                    tuple(parse_coordinate(cell) for cell in area) for area in attrs['covered_areas']
                )
            except ValidationError as e:
                raise ValidationError({'win_combinations': {name: {'covered_areas': e.messages}}})
            win_combinations.append(WinCombination(
                name=name,
                reward_multiplier=attrs['reward_multiplier'],
                when=CombinationType(attrs['when']),
                count=attrs['count'],
                group=attrs['group'],
                covered_areas=covered_areas,
            ))

        return GameConfig(
            rows=data['rows'],
            columns=data['columns'],
            symbols=symbols,
            standard_symbols=standard_symbols,
            bonus_symbols=MappingProxyType(dict(probabilities['bonus_symbols'])),
            win_combinations=tuple(win_combinations),
        )
