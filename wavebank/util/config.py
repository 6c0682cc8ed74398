from dataclasses import dataclass


@dataclass
class ConfigMixin:
    @classmethod
    def new(cls, state):
        """ Redirect `Alias(key)=value` to `key=value`.
        Then call the dataclass constructor (to validate parameters). """

        # @dataclass
        # class Preset(ConfigMixin):
        #     param: float = None
        #     width = Alias('param')
        #
        # Preset.new({'width': 0.3}) == Preset(param=0.3)

        if isinstance(state, cls):
            return state

        state = dict(state)
        for key, value in list(state.items()):
            class_var = getattr(cls, key, None)

            if isinstance(class_var, Alias):
                target = class_var.key
                if target in state:
                    raise TypeError(
                        f'{cls.__name__} received both Alias {key} and '
                        f'equivalent {target}'
                    )

                state[target] = value
                del state[key]

        return cls(**state)


@dataclass
class Alias:
    """
    @dataclass
    class Foo(ConfigMixin):
        x: int
        xx = Alias('x')     # do not add a type hint
    """
    key: str
