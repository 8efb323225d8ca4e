import click


class IsoDate(click.ParamType):
    """
    A custom Click parameter type that accepts ISO 8601 dates or date-times
    and passes them through unchanged.

    The value is kept as a string because date filters compare against the
    leading characters of event timestamps. Date-times may end in `Z` or a
    UTC offset such as `-05:00`.
    """

    name = "iso_date"

    def __init__(self, formats=None):
        super().__init__()
        self.formats = formats or [
            "%Y-%m-%d",
            "%Y-%m-%dT%H:%M",
            "%Y-%m-%dT%H:%M:%S",
            "%Y-%m-%dT%H:%M:%S%z",
        ]
        self.datetime_parser = click.DateTime(self.formats)

    def convert(self, value, param, ctx):
        if value is None:
            return None
        try:
            self.datetime_parser.convert(value, param, ctx)
        except click.exceptions.BadParameter:
            self.fail(
                f"'{value}' is not a valid date. "
                f"Expected a string in one of these formats: {', '.join(self.formats)}."
            )
        return value
