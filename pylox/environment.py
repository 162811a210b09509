from .errors import InternalError, UndefinedVariable


class Environment:
    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def define(self, name, value):
        self.values[name] = value

    def get(self, name):
        environment = self
        while environment is not None:
            if name.lexeme in environment.values:
                return environment.values[name.lexeme]
            environment = environment.enclosing
        raise UndefinedVariable(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name, value):
        environment = self
        while environment is not None:
            if name.lexeme in environment.values:
                environment.values[name.lexeme] = value
                return
            environment = environment.enclosing
        raise UndefinedVariable(name, f"Undefined variable '{name.lexeme}'.")

    def get_at(self, distance, name):
        values = self.ancestor(distance).values
        if name not in values:
            raise InternalError(
                f"Resolved variable '{name}' missing at distance {distance}.")
        return values[name]

    def assign_at(self, distance, name, value):
        values = self.ancestor(distance).values
        if name not in values:
            raise InternalError(
                f"Resolved variable '{name}' missing at distance {distance}.")
        values[name] = value

    def ancestor(self, distance):
        environment = self
        for _ in range(distance):
            environment = environment.enclosing
            if environment is None:
                raise InternalError(
                    f"Scope distance {distance} walks past the global scope.")
        return environment

    def depth(self):
        depth = 0
        environment = self.enclosing
        while environment is not None:
            depth += 1
            environment = environment.enclosing
        return depth

    def __repr__(self):
        return f"<Environment depth={self.depth()} names={sorted(self.values)}>"
