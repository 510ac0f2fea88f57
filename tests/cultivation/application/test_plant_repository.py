"""Tests for PlantRepository queries."""

from cultivation.plant.harvesting import HarvestUnits
from cultivation.plant.plant import Plant
from cultivation.plant.planting import PlantUnit, PlantUnits
from protean import current_domain


def _plant(name, taxonomic_name, origin, potency):
    return current_domain.process(
        PlantUnit(name=name, taxonomic_name=taxonomic_name, origin=origin, potency=potency),
        asynchronous=False,
    )["id"]


class TestCountAvailable:
    def test_counts_beyond_default_page_size(self):
        current_domain.process(
            PlantUnits(name="Mint", taxonomic_name="Mentha piperita", origin="Egypt", count=120),
            asynchronous=False,
        )
        assert current_domain.repository_for(Plant).count_available("Mint") == 120

    def test_excludes_harvested(self):
        _plant("Mint", "Mentha piperita", "Egypt", 2.0)
        _plant("Mint", "Mentha piperita", "Egypt", 2.0)
        current_domain.process(HarvestUnits(name="Mint", count=1), asynchronous=False)
        assert current_domain.repository_for(Plant).count_available("Mint") == 1

    def test_unknown_name_is_zero(self):
        assert current_domain.repository_for(Plant).count_available("Nothing") == 0


class TestSearch:
    def test_text_matches_name_taxonomic_name_and_origin(self):
        _plant("Rose", "Rosa damascena", "Bulgaria", 2.0)
        _plant("Vetiver", "Chrysopogon zizanioides", "Haiti", 3.0)
        _plant("Neroli", "Citrus aurantium", "Tunisia", 4.0)
        repo = current_domain.repository_for(Plant)

        assert [p.name for p in repo.search(text="rose")] == ["Rose"]
        assert [p.name for p in repo.search(text="zizan")] == ["Vetiver"]
        assert [p.name for p in repo.search(text="TUNISIA")] == ["Neroli"]

    def test_status_filter(self):
        _plant("Rose", "Rosa damascena", "Bulgaria", 2.0)
        _plant("Iris", "Iris pallida", "Tuscany", 2.0)
        current_domain.process(HarvestUnits(name="Rose", count=1), asynchronous=False)
        repo = current_domain.repository_for(Plant)

        assert [p.name for p in repo.search(status="Harvested")] == ["Rose"]
        assert [p.name for p in repo.search(status="Planted")] == ["Iris"]

    def test_sort_by_potency_descending(self):
        _plant("A-plant", "Alpha", "Here", 2.0)
        _plant("B-plant", "Beta", "Here", 4.5)
        _plant("C-plant", "Gamma", "Here", 3.0)
        plants = current_domain.repository_for(Plant).search(sort_by="potency", descending=True)
        assert [p.potency for p in plants] == [4.5, 3.0, 2.0]

    def test_sort_by_name(self):
        _plant("Iris", "Iris pallida", "Tuscany", 2.0)
        _plant("Amber", "Liquidambar", "Turkey", 2.0)
        plants = current_domain.repository_for(Plant).search(sort_by="name")
        assert [p.name for p in plants] == ["Amber", "Iris"]
