"""Package boundary tests: provider adapters depend on the core, never the reverse."""

from pytest_archon import archrule


def test_value_objects_independence() -> None:
    """
    Messages, attributes and exceptions are the foundation.
    They must not import AWS libraries or any provider package.
    """
    (
        archrule("value_objects_independence")
        .match("cloud_queue.message")
        .match("cloud_queue.attributes")
        .match("cloud_queue.exceptions")
        .should_not_import("aiobotocore*")
        .should_not_import("botocore*")
        .should_not_import("cloud_queue.sqs*")
        .should_not_import("cloud_queue.sns*")
        .should_not_import("cloud_queue.memory*")
        .check("cloud_queue")
    )


def test_facades_are_provider_agnostic() -> None:
    """
    Producer/consumer facades and the heartbeat scheduler only talk to
    transports through ports.
    """
    (
        archrule("facades_provider_agnostic")
        .match("cloud_queue.producer")
        .match("cloud_queue.consumer")
        .match("cloud_queue.heartbeat")
        .match("cloud_queue.ports")
        .should_not_import("cloud_queue.sqs*")
        .should_not_import("cloud_queue.sns*")
        .should_not_import("cloud_queue.memory*")
        .should_not_import("cloud_queue.connection")
        .should_not_import("aiobotocore*")
        .check("cloud_queue")
    )


def test_providers_isolated_from_each_other() -> None:
    """SQS and SNS adapters share the connection module, not each other."""
    (
        archrule("sqs_isolation")
        .match("cloud_queue.sqs*")
        .should_not_import("cloud_queue.sns*")
        .should_not_import("cloud_queue.memory*")
        .should_not_import("cloud_queue.factory")
        .check("cloud_queue")
    )
    (
        archrule("sns_isolation")
        .match("cloud_queue.sns*")
        .should_not_import("cloud_queue.sqs*")
        .should_not_import("cloud_queue.memory*")
        .should_not_import("cloud_queue.factory")
        .check("cloud_queue")
    )


def test_memory_provider_needs_no_aws() -> None:
    """The in-memory provider must work without any AWS library."""
    (
        archrule("memory_no_aws")
        .match("cloud_queue.memory*")
        .should_not_import("aiobotocore*")
        .should_not_import("botocore*")
        .should_not_import("cloud_queue.connection")
        .check("cloud_queue")
    )
