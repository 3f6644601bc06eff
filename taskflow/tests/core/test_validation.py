"""Tests for validate_data."""

import pytest
from pydantic import BaseModel, Field

from taskflow.core.errors.errors import ValidationError
from taskflow.core.validation import validate_data


class Sample(BaseModel):
    name: str = Field(..., min_length=1)
    count: int = Field(..., ge=0)


class TestValidateData:
    def test_instance_passes_through(self):
        sample = Sample(name="a", count=1)
        assert validate_data(sample, Sample) is sample

    def test_dict_is_validated(self):
        assert validate_data({"name": "a", "count": "3"}, Sample).count == 3

    def test_failure_reports_each_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_data({"name": "", "count": -1}, Sample, location="input", component="tests")

        error = exc_info.value
        locations = {detail.location for detail in error.validation_errors}
        assert locations == {"input.name", "input.count"}
        assert error.context.data.component == "tests"
        assert error.cause is not None
