"""Fixtures used by the test wiki pages."""

from acceptance_runner.engine.fixtures import ColumnFixture, DoFixture, Fixture


class Division(ColumnFixture):
    numerator = 0.0
    denominator = 1.0

    def quotient(self):
        return self.numerator / self.denominator


class Shop(DoFixture):

    def __init__(self):
        super().__init__()
        self.basket: list[str] = []

    def add(self, item):
        self.basket.append(item)

    def basket_contains(self, item):
        return item in self.basket

    def basket_size(self):
        return len(self.basket)

    def prices(self):
        return Division()


class Explode(Fixture):

    def do_table(self, table):
        raise RuntimeError("fixture blew up")


class FailingExecute(Division):

    def execute(self):
        raise RuntimeError("execute failed")


class FailingConstructor(Fixture):

    def __init__(self):
        raise RuntimeError("cannot build")
