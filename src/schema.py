#!/usr/bin/env python3
"""Marshmallow schemas for structural validation of rig configurations."""

from typing import Any, Dict

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, validate

from .models import (CatConfig, CommandDefinition, Marker, RigConfig, SerialConfig,
                     StateDefinition, ValueMapping)


class SerialConfigSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    port = fields.Str(required=True, validate=validate.Length(min=1))
    baud_rate = fields.Int(required=True, validate=validate.Range(min=1))
    data_bits = fields.Int(load_default=8, validate=validate.OneOf([5, 6, 7, 8]))
    stop_bits = fields.Float(load_default=1, validate=validate.OneOf([1, 1.5, 2]))
    parity = fields.Str(load_default="N", validate=validate.OneOf(["N", "E", "O", "M", "S"]))
    rts_cts = fields.Bool(load_default=False)
    # Non-positive timeouts are replaced with defaults after validation
    read_timeout_ms = fields.Int(load_default=0)
    write_timeout_ms = fields.Int(load_default=0)
    line_delimiter = fields.Str(load_default=";", validate=validate.Length(equal=1))

    @post_load
    def make_serial(self, data: Dict[str, Any], **kwargs: Any) -> SerialConfig:
        return SerialConfig(**data)


class CatConfigSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    listener_rate_limiter_interval_ms = fields.Int(load_default=0)
    listener_read_timeout_ms = fields.Int(load_default=0)
    send_channel_size = fields.Int(required=True, validate=validate.Range(min=1))
    processing_channel_size = fields.Int(required=True, validate=validate.Range(min=1))
    status_channel_size = fields.Int(load_default=1, validate=validate.Range(min=0))

    @post_load
    def make_cat(self, data: Dict[str, Any], **kwargs: Any) -> CatConfig:
        return CatConfig(**data)


class ValueMappingSchema(Schema):
    key = fields.Str(required=True)
    value = fields.Str(required=True)

    @post_load
    def make_mapping(self, data: Dict[str, Any], **kwargs: Any) -> ValueMapping:
        return ValueMapping(**data)


class MarkerSchema(Schema):
    index = fields.Int(required=True, validate=validate.Range(min=0))
    length = fields.Int(required=True, validate=validate.Range(min=0))
    tag = fields.Str(required=True, validate=validate.Length(min=1))
    value_mappings = fields.List(fields.Nested(ValueMappingSchema), load_default=list)

    @post_load
    def make_marker(self, data: Dict[str, Any], **kwargs: Any) -> Marker:
        data["value_mappings"] = tuple(data["value_mappings"])
        return Marker(**data)


class StateDefinitionSchema(Schema):
    # Blank prefixes are rejected by the matcher, not here
    prefix = fields.Str(required=True)
    markers = fields.List(fields.Nested(MarkerSchema), load_default=list)

    @post_load
    def make_state(self, data: Dict[str, Any], **kwargs: Any) -> StateDefinition:
        return StateDefinition(prefix=data["prefix"], markers=tuple(data["markers"]))


class CommandDefinitionSchema(Schema):
    name = fields.Str(required=True, validate=validate.Length(min=1))
    template = fields.Str(required=True)

    @post_load
    def make_command(self, data: Dict[str, Any], **kwargs: Any) -> CommandDefinition:
        return CommandDefinition(**data)


class RigConfigSchema(Schema):
    """Declarative validation schema for one rig."""

    class Meta:
        unknown = EXCLUDE

    id = fields.Int(required=True, validate=validate.Range(min=1))
    name = fields.Str(load_default="")
    serial = fields.Nested(SerialConfigSchema, required=True)
    cat = fields.Nested(CatConfigSchema, required=True)
    states = fields.List(fields.Nested(StateDefinitionSchema), load_default=list)
    commands = fields.List(fields.Nested(CommandDefinitionSchema), load_default=list)

    @post_load
    def make_config(self, data: Dict[str, Any], **kwargs: Any) -> RigConfig:
        # Numbers given as JSON strings ("100") come out of load() as ints
        data["states"] = tuple(data["states"])
        data["commands"] = tuple(data["commands"])
        return RigConfig(**data)


class ConfigValidator:
    """Structural validator for RigConfig objects.

    Build one at process start and hand it to whatever needs it; the schema
    is constructed once per validator.
    """

    def __init__(self):
        self._schema = RigConfigSchema()

    def errors(self, cfg: RigConfig) -> Dict[str, Any]:
        """Return the marshmallow error dict for cfg (empty when valid)."""
        return self._schema.validate(cfg.to_dict())

    def validate(self, cfg: RigConfig) -> RigConfig:
        """Validate cfg and return it with every field converted to its declared type.

        Raises:
            ValidationError: describing every problem found in cfg
        """
        return self._schema.load(cfg.to_dict())
