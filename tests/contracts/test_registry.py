"""Tests for attaching contracts to classes."""

import re

import pytest

pytestmark = pytest.mark.unit

from classcontract.contracts import (
    ContractDefinitionError,
    ContractedMethod,
    PreconditionViolation,
    accepts,
    assert_that,
    attach,
    contract,
    contracts_of,
    returns,
)
from classcontract.schemas import ContractSettings


class Account:
    def __init__(self):
        self.balance = 0
        self.deposits = 0

    def deposit(self, amount):
        self.deposits += 1
        self.balance += amount

    def withdraw(self, amount):
        self.balance -= amount
        return amount

    def get_balance(self):
        return self.balance

    def get_deposits(self):
        return self.deposits


@pytest.fixture
def account_class():
    """Fresh subclass per test so installed contracts do not leak."""
    class FreshAccount(Account):
        pass
    return FreshAccount


positive = assert_that(lambda self, amount: amount > 0, "amount must be positive")


class TestSelectors:
    """Selectors are resolved once, at attachment time."""

    def test_single_name(self, account_class):
        assert attach(account_class, "deposit", pre=positive) == ["deposit"]
        with pytest.raises(PreconditionViolation, match="FreshAccount.deposit"):
            account_class().deposit(-1)

    def test_list_of_names(self, account_class):
        names = attach(account_class, ["deposit", "withdraw"], pre=positive)
        assert names == ["deposit", "withdraw"]
        with pytest.raises(PreconditionViolation, match="withdraw"):
            account_class().withdraw(0)

    def test_duplicate_names_collapse(self, account_class):
        assert attach(account_class, ["deposit", "deposit"], pre=positive) == ["deposit"]
        assert len(contracts_of(account_class)["deposit"].pre) == 1

    def test_set_of_names_is_sorted(self, account_class):
        names = attach(account_class, {"withdraw", "deposit"}, pre=positive)
        assert names == ["deposit", "withdraw"]

    def test_pattern(self, account_class):
        names = attach(account_class, re.compile(r"^get_"), returns("Int"))
        assert sorted(names) == ["get_balance", "get_deposits"]

    def test_pattern_matching_nothing(self, account_class):
        assert attach(account_class, re.compile(r"^set_"), pre=positive) == []

    def test_missing_method_is_an_error(self, account_class):
        with pytest.raises(ContractDefinitionError, match="has no method 'transfer'"):
            attach(account_class, "transfer", pre=positive)

    def test_bad_selector_type(self, account_class):
        with pytest.raises(ContractDefinitionError, match="Method selector"):
            attach(account_class, 42, pre=positive)

    def test_non_string_name(self, account_class):
        with pytest.raises(ContractDefinitionError, match="must be strings"):
            attach(account_class, ["deposit", 1], pre=positive)

    def test_methods_added_later_are_not_covered(self, account_class):
        attach(account_class, re.compile(r"^get_"), pre=assert_that(lambda self: False))

        def get_owner(self):
            return "nobody"

        account_class.get_owner = get_owner
        assert account_class().get_owner() == "nobody"

    def test_not_a_class(self):
        with pytest.raises(ContractDefinitionError, match="attach to classes"):
            attach(Account(), "deposit", pre=positive)


class TestAccumulation:
    """Declarations on the same method stack instead of replacing."""

    def test_pre_checks_accumulate_in_order(self, account_class):
        log = []
        attach(account_class, "deposit", pre=lambda self, amount: log.append("A"))
        attach(account_class, "deposit", pre=lambda self, amount: log.append("B"))

        account_class().deposit(5)
        assert log == ["A", "B"]

    def test_one_wrapper_per_method(self, account_class):
        attach(account_class, "deposit", pre=positive)
        first = account_class.__dict__["deposit"]
        attach(account_class, "deposit", post=positive)

        assert account_class.__dict__["deposit"] is first
        assert first.bundle.describe() == "pre=1, post=1, invar=0"

    def test_both_checks_enforced(self, account_class):
        attach(account_class, "withdraw", pre=positive)
        attach(account_class, "withdraw", pre=assert_that(lambda self, amount: amount < 100, "limit 100"))
        account = account_class()

        with pytest.raises(PreconditionViolation, match="positive"):
            account.withdraw(-5)
        with pytest.raises(PreconditionViolation, match="limit 100"):
            account.withdraw(500)
        assert account.withdraw(50) == 50


class TestInheritance:
    """Inherited methods are wrapped on the subclass only."""

    def test_base_class_untouched(self, account_class):
        attach(account_class, "deposit", pre=positive)

        assert isinstance(vars(account_class)["deposit"], ContractedMethod)
        assert not isinstance(vars(Account)["deposit"], ContractedMethod)
        Account().deposit(-1)

    def test_subclass_contract_wraps_base_contract(self, account_class):
        class Savings(account_class):
            pass

        attach(account_class, "deposit", pre=positive)
        attach(Savings, "deposit", pre=assert_that(lambda self, amount: amount < 1000, "too large"))
        savings = Savings()

        with pytest.raises(PreconditionViolation, match="Savings.deposit: too large"):
            savings.deposit(5000)
        with pytest.raises(PreconditionViolation, match="FreshAccount.deposit: amount must be positive"):
            savings.deposit(-5)

        savings.deposit(10)
        assert savings.balance == 10
        assert savings.deposits == 1

    def test_nested_wrappers_share_the_calling_context(self, account_class):
        class Savings(account_class):
            pass

        attach(account_class, "withdraw", returns("Str"))
        attach(Savings, "withdraw", pre=positive)

        assert Savings().withdraw.void(5) is None


class TestEnforcementSwitch:
    """A disabled switch installs nothing."""

    def test_explicit_settings(self, account_class, disabled_settings):
        assert attach(account_class, "deposit", pre=positive, settings=disabled_settings) == []
        assert "deposit" not in vars(account_class)
        account_class().deposit(-1)

    def test_settings_as_dict(self, account_class):
        assert attach(account_class, "deposit", pre=positive, settings={"enabled": False}) == []

    def test_environment_switch(self, account_class, disable_contracts):
        assert attach(account_class, "deposit", pre=positive) == []
        account = account_class()
        account.deposit(-1)
        assert account.balance == -1

    def test_environment_beats_explicit_settings(self, account_class, disable_contracts):
        settings = ContractSettings(enabled=True)
        assert attach(account_class, "deposit", pre=positive, settings=settings) == []

    def test_disabled_declarations_are_not_validated(self, account_class, disabled_settings):
        assert attach(account_class, "transfer", pre=42, settings=disabled_settings) == []

    def test_switch_is_read_at_declaration_time(self, account_class, monkeypatch):
        attach(account_class, "deposit", pre=positive)
        monkeypatch.setenv("CLASSCONTRACT_DISABLE", "1")

        with pytest.raises(PreconditionViolation):
            account_class().deposit(-1)


class TestContractDecorator:
    """@contract is attach() at class definition time."""

    def test_decorator(self, type_registry):
        @contract("add", accepts("EvenInt", registry=type_registry))
        class Adder:
            def __init__(self):
                self.total = 0

            def add(self, n):
                self.total += n

        adder = Adder()
        adder.add(2)
        with pytest.raises(PreconditionViolation, match="not even"):
            adder.add(3)
        assert adder.total == 2

    def test_stacked_decorators_apply_bottom_up(self):
        log = []

        @contract("run", pre=lambda self: log.append("top"))
        @contract("run", pre=lambda self: log.append("bottom"))
        class Job:
            def run(self):
                log.append("body")

        Job().run()
        assert log == ["bottom", "top", "body"]

    def test_definition_error_fails_class_definition(self):
        with pytest.raises(ContractDefinitionError):
            @contract("run", "pre")
            class Job:
                def run(self):
                    pass

    def test_contracts_of(self):
        @contract("run", returns("Int"))
        class Job:
            def run(self):
                return 1

            def stop(self):
                pass

        bundles = contracts_of(Job)
        assert list(bundles) == ["run"]
        assert len(bundles["run"].post) == 1
        with pytest.raises(TypeError):
            bundles["stop"] = None
