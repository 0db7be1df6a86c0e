import pytest

from helpers import Account, CustomError
from mockwright import (
    ConfigurationError,
    Container,
    CountMismatch,
    Expectation,
    MockwrightConfig,
    OrderViolation,
    Undefined,
    UnsupportedOperation,
)


class TestArgumentMatching:
    def test_unconstrained_accepts_everything(self, mock):
        expectation = mock.should_receive("charge")
        assert expectation.match_args([])
        assert expectation.match_args([1, "a", object()])

    def test_with_no_args(self, mock):
        expectation = mock.should_receive("charge").with_no_args()
        assert expectation.match_args([])
        assert not expectation.match_args([None])

    def test_with_args_requires_same_length(self, mock):
        expectation = mock.should_receive("charge").with_(100, "/^EUR|USD$/")
        assert expectation.match_args([100, "EUR"])
        assert not expectation.match_args([100, "GBP"])
        assert not expectation.match_args([100])
        assert not expectation.match_args([100, "EUR", None])

    def test_with_empty_list_means_no_args(self, mock):
        expectation = mock.should_receive("charge").with_args([])
        assert expectation.match_args([])
        assert not expectation.match_args([1])

    def test_with_args_closure_gets_all_arguments(self, mock):
        expectation = mock.should_receive("charge").with_args(lambda amount, currency: amount > 10)
        assert expectation.match_args([50, "EUR"])
        assert not expectation.match_args([5, "EUR"])

    def test_setting_one_form_clears_the_other(self, mock):
        expectation = mock.should_receive("charge").with_no_args().with_(1)
        assert expectation.match_args([1])
        expectation.with_no_args().with_any_args()
        assert expectation.match_args([1, 2])

    def test_with_args_rejects_other_input(self, mock):
        with pytest.raises(ConfigurationError):
            mock.should_receive("charge").with_args("not a list")


class TestResults:
    def test_queued_values_then_sticky_last(self, mock):
        expectation = mock.should_receive("next").and_return(1, 2, 3)
        assert [expectation.verify_call([]) for _ in range(4)] == [1, 2, 3, 3]

    def test_single_value_repeats(self, mock):
        expectation = mock.should_receive("next").and_return(7)
        assert [expectation.verify_call([]) for _ in range(3)] == [7, 7, 7]

    def test_default_value_without_queues(self, mock):
        assert mock.should_receive("next").verify_call([]) is None

    def test_and_return_using(self, mock):
        expectation = mock.should_receive("add").and_return_using(lambda a, b: a + b)
        assert expectation.verify_call([1, 2]) == 3
        assert expectation.verify_call([3, 4]) == 7

    def test_shortcuts(self, mock):
        assert mock.should_receive("a").and_return_self().verify_call([]) is mock
        assert mock.should_receive("b").and_return_true().verify_call([]) is True
        assert mock.should_receive("c").and_return_false().verify_call([]) is False
        assert mock.should_receive("d").and_return_none().verify_call([]) is None
        assert isinstance(mock.should_receive("e").and_return_undefined().verify_call([]), Undefined)

    def test_and_raise_instance(self, mock):
        expectation = mock.should_receive("charge").and_raise(CustomError("boom"))
        with pytest.raises(CustomError, match="boom"):
            expectation.verify_call([])

    def test_and_raise_class_with_args(self, mock):
        expectation = mock.should_receive("charge").and_raise(CustomError, "declined")
        with pytest.raises(CustomError, match="declined"):
            expectation.verify_call([])

    def test_and_raise_rejects_non_exception(self, mock):
        with pytest.raises(ConfigurationError):
            mock.should_receive("charge").and_raise("boom")

    def test_and_raise_exceptions_in_sequence(self, mock):
        expectation = mock.should_receive("charge").and_raise_exceptions(
            [CustomError("first"), ValueError("second")]
        )
        with pytest.raises(CustomError):
            expectation.verify_call([])
        with pytest.raises(ValueError):
            expectation.verify_call([])
        with pytest.raises(ValueError):
            expectation.verify_call([])

    def test_and_raise_exceptions_rejects_non_exception(self, mock):
        with pytest.raises(ConfigurationError):
            mock.should_receive("charge").and_raise_exceptions([CustomError(), 5])

    def test_and_set_consumes_one_value_per_call(self, mock):
        expectation = mock.should_receive("refresh").and_set("status", "pending", "done")
        expectation.verify_call([])
        assert mock.status == "pending"
        expectation.verify_call([])
        assert mock.status == "done"
        mock.status = "changed"
        expectation.verify_call([])
        assert mock.status == "changed"

    def test_side_effects_skipped_when_raising(self, mock):
        expectation = mock.should_receive("refresh").and_set("status", "x").and_raise(CustomError())
        with pytest.raises(CustomError):
            expectation.verify_call([])
        assert not hasattr(mock, "status")


class TestCounts:
    @pytest.mark.parametrize("calls, passes", [(1, False), (2, True), (3, False)])
    def test_times(self, mock, calls, passes):
        expectation = mock.should_receive("ping").times(2)
        for _ in range(calls):
            expectation.verify_call([])
        if passes:
            expectation.verify()
        else:
            with pytest.raises(CountMismatch) as excinfo:
                expectation.verify()
            assert excinfo.value.expected == 2
            assert excinfo.value.actual == calls
            assert f"expected exactly 2, got {calls}" in str(excinfo.value)

    @pytest.mark.parametrize("calls, passes", [(0, False), (1, True), (3, True), (4, False)])
    def test_range(self, mock, calls, passes):
        expectation = mock.should_receive("ping").at_least().times(1).at_most().times(3)
        for _ in range(calls):
            expectation.verify_call([])
        if passes:
            expectation.verify()
        else:
            with pytest.raises(CountMismatch):
                expectation.verify()

    def test_between_is_a_range(self, mock):
        expectation = mock.should_receive("ping").between(2, 3)
        expectation.verify_call([])
        with pytest.raises(CountMismatch):
            expectation.verify()

    def test_every_violated_bound_is_reported(self, mock):
        expectation = mock.should_receive("ping").times(2).at_least().times(3)
        expectation.verify_call([])
        with pytest.raises(CountMismatch) as excinfo:
            expectation.verify()
        assert len(excinfo.value.related) == 2
        assert "at least 3" in str(excinfo.value)

    def test_eligibility(self, mock):
        expectation = mock.should_receive("ping").once()
        assert expectation.is_call_count_constrained()
        assert expectation.is_eligible()
        expectation.verify_call([])
        assert not expectation.is_eligible()

    def test_unconstrained_is_always_eligible(self, mock):
        expectation = mock.should_receive("ping")
        for _ in range(10):
            expectation.verify_call([])
        assert expectation.is_eligible()
        assert not expectation.is_call_count_constrained()
        expectation.verify()

    def test_zero_or_more_times(self, mock):
        expectation = mock.should_receive("ping").zero_or_more_times()
        expectation.verify()
        expectation.verify_call([])
        expectation.verify()

    def test_never(self, mock):
        expectation = mock.should_receive("ping").never()
        expectation.verify()
        expectation.verify_call([])
        with pytest.raises(CountMismatch):
            expectation.verify()

    @pytest.mark.parametrize("limit", ["2", 2.0, True])
    def test_non_integer_limit(self, mock, limit):
        with pytest.raises(ConfigurationError):
            mock.should_receive("ping").times(limit)

    def test_times_without_limit_is_a_no_op(self, mock):
        assert not mock.should_receive("ping").times().is_call_count_constrained()

    def test_conflicting_counts_allowed_by_default(self, mock):
        expectation = mock.should_receive("ping").times(2).times(5)
        assert expectation.is_call_count_constrained()

    def test_conflicting_counts_rejected_when_configured(self):
        container = Container(MockwrightConfig(detect_count_conflicts=True))
        mock = container.mock()
        with pytest.raises(ConfigurationError):
            mock.should_receive("ping").times(2).times(5)
        with pytest.raises(ConfigurationError):
            mock.should_receive("pong").at_least().times(4).at_most().times(2)


class TestOrdering:
    def test_declared_order_passes(self, mock):
        first = mock.should_receive("open").ordered()
        second = mock.should_receive("close").ordered()
        first.verify_call([])
        second.verify_call([])

    def test_out_of_order_raises(self, mock):
        first = mock.should_receive("open").ordered()
        second = mock.should_receive("close").ordered()
        second.verify_call([])
        with pytest.raises(OrderViolation):
            first.verify_call([])
        assert first.call_count == 0

    def test_grouped_expectations_share_a_position(self, mock):
        a = mock.should_receive("read").ordered("group-a")
        b = mock.should_receive("write").ordered("group-a")
        last = mock.should_receive("close").ordered()
        assert a.get_order_number() == b.get_order_number()
        b.verify_call([])
        a.verify_call([])
        b.verify_call([])
        last.verify_call([])

    def test_global_ordering_spans_mocks(self, container):
        db = container.mock("db")
        cache = container.mock("cache")
        connect = db.should_receive("connect").globally().ordered()
        warm = cache.should_receive("warm").globally().ordered()
        assert connect.get_order_number() is None
        assert warm.get_global_order_number() == connect.get_global_order_number() + 1
        warm.verify_call([])
        with pytest.raises(OrderViolation):
            connect.verify_call([])

    def test_globally_applies_to_next_ordered_only(self, mock):
        expectation = mock.should_receive("open").globally().ordered().ordered()
        assert expectation.get_global_order_number() == 1
        assert expectation.get_order_number() == 1

    def test_per_mock_ordering_is_independent(self, container):
        db = container.mock("db")
        cache = container.mock("cache")
        db.should_receive("a").ordered()
        late = db.should_receive("b").ordered()
        early = cache.should_receive("c").ordered()
        late.verify_call([])
        early.verify_call([])


class TestPassthru:
    def test_passthru_calls_real_object(self, container):
        account = Account(10)
        mock = container.mock(real=account)
        expectation = mock.should_receive("deposit").passthru().and_return(0)
        assert expectation.verify_call([5]) == 15
        assert account.balance == 15
        assert expectation.call_count == 1

    def test_passthru_skips_side_effects(self, container):
        account = Account(10)
        mock = container.mock(real=account)
        mock.should_receive("deposit").passthru().and_set("audited", True)
        assert mock.deposit(5) == 15
        assert not hasattr(mock, "audited")
        assert not hasattr(account, "audited")

    def test_passthru_needs_a_real_object(self, mock):
        with pytest.raises(UnsupportedOperation):
            mock.should_receive("deposit").passthru()


class TestClone:
    def test_clone_counts_independently(self, mock):
        original = mock.should_receive("ping").times(2)
        clone = original.clone()
        clone.verify_call([])
        clone.verify_call([])
        clone.verify()
        assert original.call_count == 0
        with pytest.raises(CountMismatch):
            original.verify()
        original.verify_call([])
        assert clone.call_count == 2

    def test_clone_drains_its_own_queue(self, mock):
        original = mock.should_receive("next").and_return(1, 2)
        clone = original.clone()
        assert clone.verify_call([]) == 1
        assert original.verify_call([]) == 1


class TestIntrospection:
    def test_signature(self, mock):
        expectation = mock.should_receive("charge").with_(100, "EUR")
        assert str(expectation) == "charge(100, 'EUR')"
        assert expectation.name == "charge"
        assert expectation.get_mock() is mock

    def test_signature_without_args(self, mock):
        assert str(mock.should_receive("charge")) == "charge()"

    def test_expectation_can_be_built_directly(self, mock):
        expectation = Expectation(mock, "charge").and_return(1)
        assert expectation.verify_call([]) == 1
