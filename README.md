# dddframe

Small building blocks for writing applications in a domain-driven,
event-driven style.

- **Values, IDs and entities**: `Value` (`dddframe.value`), `ID` (made with
  `new_id` or `generate_uuid` from `dddframe.entity_id`) and `Entity`
  (`dddframe.entity`). Values compare by what they hold and entities by their ID.
- **Aggregates**: an `Aggregate` (`dddframe.aggregate`) is an entity that
  records domain events through an `EventProducer`. An `Event`
  (`dddframe.event`) can be written to JSON with `to_json()` and read back with
  `event_from_json`. `map_event_payload` turns a payload back into a dataclass.
- **Commands and queries**: `Command` and `Query` travel over a `CommandBus` and
  a `QueryBus`. Both rest on a `ServiceBus` (`dddframe.service_bus`), which
  allows one handler per message type and wraps handlers in middleware.
  `logger()` is a ready-made middleware. A second handler for the same type
  raises `DuplicateHandlerError`. A message with no handler raises
  `HandlerNotFoundError`.
- **Services**: a `CommandService` or a `QueryService` subscribes an executor
  to the message types it handles. A `QueryResponse` carries paging
  information.
- **Reactions to events**: the `EventBus` (`dddframe.event_bus`) passes each
  event to the `View` objects (read-side projections) and the `Policy` objects
  ("when this happens, do that") that subscribe to it. A command that a policy
  returns goes on to the command bus. When several subscribers fail, the bus
  raises one `MultipleErrors` (`dddframe.errors`) that holds all of them.
- **Wiring**: a `BoundedContext` (`dddframe.bounded_context`) brings together
  one context's buses, views, policies, services, HTTP endpoints and message
  consumers. Its registration methods return the context, so calls can be
  chained.
- **HTTP**: `CommandEndpoint` and `QueryEndpoint` (`dddframe.web`) turn
  requests into commands or queries. `HttpServer` serves the endpoints under
  `/api/<path>` on a background thread, using werkzeug.
- **Adapters**:
  - in-memory: `dddframe.inmemory` holds an `EventLog`, an `EventPublisher`
    that puts JSON events on a `queue.Queue`, and an `InMemoryMessageConsumer`
    that reads such a queue;
  - MongoDB: `MongoEventLog` in `dddframe.mongodb.event_log`.
- **Ports**: `dddframe.ports` defines the abstract `EventPublisher` and
  `Repository` that adapters implement.

## Installation

```
pip install dddframe
```

Install the `test` extra to run the test suite:

```
pip install "dddframe[test]"
pytest
```

## An aggregate that records events

```python
from dataclasses import dataclass

from dddframe.aggregate import Aggregate
from dddframe.entity_id import new_id


@dataclass
class NameUpdated:
    name: str


class Company(Aggregate):
    def __init__(self, number, name):
        super().__init__(new_id(number))
        self.name = name

    def rename(self, name):
        self.name = name
        self.register_event(self.aggregate_type, self.id, NameUpdated(name))


company = Company(1, "Company A")
company.rename("Company B")

events = company.events()  # returns the recorded events and clears them
assert len(events) == 1
assert events[0].payload == NameUpdated("Company B")
assert company.events() == []
```

An event's type is named after its payload's class, as `module.ClassName`.
Views and policies subscribe to events by that name.

## Commands in a bounded context

```python
from dataclasses import dataclass

from dddframe.bounded_context import BoundedContext, ContextConfiguration
from dddframe.command import Command
from dddframe.command_service import CommandService


@dataclass(frozen=True)
class RenameCompany:
    name: str


received = []


def execute(command, ctx):
    received.append(command.body.name)


context = BoundedContext(ContextConfiguration(name="companies"))
context.register_command_service(CommandService(execute, RenameCompany))
context.command_bus.dispatch(Command(RenameCompany("Company B")))
assert received == ["Company B"]
```

A command service that the context registers is given the context's event bus.
It can then publish an aggregate's pending events with `dispatch_from`.

## Paging query results

```python
from dddframe.query import QueryResponse

response = QueryResponse(["a", "b"], 10, 0, 2)
assert response.total_pages == 5
assert response.page_number == 1
assert not response.has_prev
assert response.next == 2
```

## Configuration files

`properties(config_type)` in `dddframe.properties` reads `properties.json` from
the working directory. `properties(config_type, "dev")` reads
`properties.dev.json` instead. When the plain file is missing, the function
reads `properties[.<profile>].enc.json` and passes its contents to the
module-level `decryptor`, which you set yourself. The fields of the JSON object
fill in `config_type`. Any of the following raises `PropertiesError`:

- a missing file;
- more than one profile;
- an encrypted file with no decryptor set;
- a file that cannot be parsed.

## The example hotel application

`dddframe.example` holds a small hotel domain:

- `dddframe.example.hotel.domain` has rooms, guests and the checkout policy;
- `dddframe.example.hotel.adapters` and `dddframe.example.hotel.application`
  hold its adapters and services;
- `hotel_context()` in `dddframe.example.hotel.context` and `auth_context()` in
  `dddframe.example.auth` build ready-wired bounded contexts.

## What the package does not do

- There is no AMQP transport. `dddframe.amqp` is empty, so events are
  published and consumed only in memory.
- There is no application server that hosts several bounded contexts, starts
  their message consumers and waits for a signal. There is also no command
  that runs the example application. To serve a context over HTTP, register
  its endpoints on an `HttpServer` yourself and call `start()`. To receive
  messages, start its in-memory consumers yourself.
- The base `MessageConsumer` has no transport of its own. Its `start()` and
  `stop()` raise `TransportNotConfiguredError`.