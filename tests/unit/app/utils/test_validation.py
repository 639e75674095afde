from campaign_creation.app.utils.validation import validate_schema


def test_valid_schema():
    schema = {'type': 'object', 'properties': {'name': {'type': 'string', 'minLength': 1}}}

    assert validate_schema(schema) == []


def test_invalid_schema():
    errors = validate_schema({'type': 'not-a-type', 'minItems': -1})

    assert len(errors) >= 1


def test_all_errors_are_collected():
    errors = validate_schema({'type': 'not-a-type', 'minItems': -1, 'required': 'name'})

    for path in ('$.type', '$.minItems', '$.required'):
        assert any(error.startswith(f'{path} : ') for error in errors)
