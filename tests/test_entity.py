from dddframe.entity import Entity
from dddframe.entity_id import new_id


class NamedEntity(Entity):
    def __init__(self, id, name):
        super().__init__(new_id(id))
        self.name = name


def test_new_entity():
    entity = NamedEntity("ID123", "value")
    identifier = entity.id
    assert str(identifier) == "ID123"
    assert identifier.equals(new_id("ID123")) is True
    assert entity.name == "value"


def test_update_name():
    entity = NamedEntity("ID123", "value")
    entity.name = "value2"
    assert entity.name == "value2"
    result = entity.equals(Entity(new_id("ID123")))
    assert result is True


def test_equals():
    entity1 = NamedEntity("ID123", "value")
    assert entity1.equals(entity1) is True
    assert entity1.equals(NamedEntity("ID123", "value2")) is True
    assert entity1.equals(Entity(new_id("ID123"))) is True
    assert entity1.equals(NamedEntity("ID124", "value")) is False
    assert entity1.equals(Entity(new_id("ID124"))) is False
    assert entity1.equals(None) is False
    assert entity1.equals(10) is False


def test_plain_entities_compare_by_id():
    first = Entity(new_id("ID123"))
    same = Entity(new_id("ID123"))
    other = Entity(new_id("ID999"))
    assert str(first.id) == "ID123"
    assert first.equals(same) is True
    assert first.equals(other) is False


def test_eq_and_hash_follow_identity():
    entity1 = NamedEntity("ID123", "value")
    entity2 = NamedEntity("ID123", "other")
    assert entity1.id.equals(new_id("ID123")) is True
    assert (entity1 == entity2) is True
    assert len({entity1, entity2}) == 1