from mintadmin.aws.errors import (
    is_already_attached_error,
    is_no_updates_error,
    is_stack_not_found_error,
)
from mintadmin.exceptions import (
    AWSOperationError,
    NoDefaultVPCError,
    StackFailedError,
    StackNotFoundError,
)
from tests.fakes import client_error, no_updates_error, not_found_error


class TestStackNotFound:
    def test_validation_error_with_does_not_exist(self):
        assert is_stack_not_found_error(not_found_error("mint-admin"))

    def test_other_validation_error(self):
        assert not is_stack_not_found_error(client_error("Template format error"))

    def test_other_error_code_with_phrase(self):
        err = client_error("Role does not exist", code="AccessDenied")
        assert not is_stack_not_found_error(err)

    def test_plain_exception_text(self):
        assert is_stack_not_found_error(Exception("Stack with id foo does not exist"))
        assert not is_stack_not_found_error(Exception("throttled"))

    def test_none(self):
        assert not is_stack_not_found_error(None)


class TestNoUpdates:
    def test_no_updates_message(self):
        assert is_no_updates_error(no_updates_error())

    def test_other_validation_error(self):
        assert not is_no_updates_error(not_found_error())

    def test_plain_exception_text(self):
        assert is_no_updates_error(RuntimeError("No updates are to be performed."))
        assert not is_no_updates_error(None)


class TestExceptionMessages:
    def test_no_default_vpc_message_and_hint(self):
        err = NoDefaultVPCError()

        assert err.message == "no default VPC found in this region"
        assert "aws ec2 create-default-vpc" in str(err)

    def test_aws_operation_error_names_stack(self):
        err = AWSOperationError("create stack", RuntimeError("boom"), "mint-admin")

        assert err.message == "create stack 'mint-admin' failed"
        assert err.context == "boom"
        assert err.operation == "create stack"

    def test_stack_failed_error(self):
        err = StackFailedError("mint-admin", "ROLLBACK_COMPLETE")

        assert "mint-admin" in err.message
        assert "ROLLBACK_COMPLETE" in err.message
        assert err.status == "ROLLBACK_COMPLETE"

    def test_stack_not_found_after_converging_does_not_suggest_deploy(self):
        err = StackNotFoundError("mint-admin")

        assert "collecting outputs" in err.message
        assert "admin:deploy" not in err.context

    def test_stack_not_found_elsewhere_suggests_deploy(self):
        err = StackNotFoundError("mint-admin", phase="reading status")

        assert err.context == "Run: mint-admin admin:deploy"


class TestAlreadyAttached:
    def test_conflict_code(self):
        assert is_already_attached_error(client_error("exists", code="ConflictException"))

    def test_already_attached_message(self):
        assert is_already_attached_error(client_error("Policy already attached", code="ValidationException"))

    def test_other_errors(self):
        assert not is_already_attached_error(client_error("Denied", code="AccessDeniedException"))
        assert not is_already_attached_error(None)
