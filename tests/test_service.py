from adminkit.service import CombinedError, Service


def test_first_error_is_kept_as_is():
    service = Service()
    err = ValueError("a")
    assert service.add_error(err) is err
    assert service.error is err


def test_second_error_is_combined():
    service = Service()
    first, second = ValueError("a"), KeyError("b")
    service.add_error(first)
    combined = service.add_error(second)
    assert isinstance(combined, CombinedError)
    assert combined.previous is first
    assert combined.error is second
    assert combined.__cause__ is second
    assert str(combined) == f"{first}; {second}"


def test_none_after_error_changes_nothing():
    service = Service()
    err = ValueError("a")
    service.add_error(err)
    assert service.add_error(None) is err


def test_none_on_clean_service():
    service = Service()
    assert service.add_error(None) is None
    assert service.error is None


def test_three_errors_chain():
    service = Service()
    for text in ("a", "b", "c"):
        service.add_error(ValueError(text))
    assert str(service.error) == "a; b; c"