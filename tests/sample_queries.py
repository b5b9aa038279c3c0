# tests/sample_queries.py
from atlas_search import compound, fields_of, range_, text
from tests.models import Person

born_in_the_nineties = (
    compound().must(text("born", "plot")).filter(range_("year").gte(1990).lt(2000))
)

not_a_query = 42


def typed_biography():
    return text("born", fields_of(Person).biography)
