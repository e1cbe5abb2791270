from holders.exceptions import ValidationFailure


def validate_or_raise(serializer_class, data, *, prefix=None) -> dict:
    """Run ``serializer_class`` over ``data`` and return the validated values.

    Field errors are re-raised as :class:`~holders.exceptions.ValidationFailure`
    so callers see the same error type whatever rejected the input.
    """
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        raise ValidationFailure.from_serializer_errors(serializer.errors, prefix=prefix)
    return serializer.validated_data
