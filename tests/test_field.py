"""Tests for the Field grid: lookups, neighborhoods, placement and registries."""

import random

import pytest

from mobsim.entities.mob import DeathCause, Mob
from mobsim.entities.plant import Grass
from mobsim.entities.species import PlantKind, Species
from mobsim.environment import EnvironmentState, Season, TimeOfDay, Weather
from mobsim.spatial.field import Field
from mobsim.spatial.location import Location
from mobsim.util.rng import MissingRNGError


class TestConstruction:
    def test_invalid_dimensions_fall_back_to_defaults(self, seeded_rng, caplog):
        field = Field(0, -5, rng=seeded_rng)
        assert (field.depth, field.width) == (80, 120)
        assert "using defaults" in caplog.text

    def test_rng_is_required(self):
        with pytest.raises(MissingRNGError):
            Field(5, 5)

    def test_environment_accessors(self, seeded_rng):
        env = EnvironmentState(TimeOfDay.NIGHT, Weather.RAINY, Season.WINTER)
        field = Field(5, 5, rng=seeded_rng, environment=env)
        assert field.time_of_day is TimeOfDay.NIGHT
        assert field.weather is Weather.RAINY
        assert field.season is Season.WINTER


class TestLookups:
    def test_out_of_bounds_and_none_return_none(self, small_field):
        assert small_field.get_object_at(None) is None
        assert small_field.get_object_at(Location(-1, 0)) is None
        assert small_field.get_object_at(Location(10, 10)) is None

    def test_object_at_prefers_living_mob_over_plant(self, small_field, place_mob):
        loc = Location(3, 3)
        grass = Grass(loc)
        small_field.place_object(grass, loc)
        cow = place_mob(small_field, Species.COW, 3, 3)
        assert small_field.get_object_at(loc) is cow

        cow.set_dead(DeathCause.PREDATION)
        assert small_field.get_object_at(loc) is grass
        assert small_field.get_mob_at(loc) is cow


class TestNeighborhoods:
    def test_adjacent_locations_in_corner(self, small_field):
        adjacent = small_field.get_adjacent_locations(Location(0, 0))
        assert sorted(adjacent) == [Location(0, 1), Location(1, 0), Location(1, 1)]

    def test_adjacent_locations_in_middle(self, small_field):
        adjacent = small_field.get_adjacent_locations(Location(5, 5))
        assert len(adjacent) == 8
        assert Location(5, 5) not in adjacent

    def test_adjacent_locations_are_reshuffled(self, small_field):
        orders = {tuple(small_field.get_adjacent_locations(Location(5, 5))) for _ in range(20)}
        assert len(orders) > 1

    def test_adjacent_of_none_is_empty(self, small_field):
        assert small_field.get_adjacent_locations(None) == []

    def test_orthogonal_locations(self, small_field):
        assert sorted(small_field.get_orthogonal_locations(Location(5, 5))) == [
            Location(4, 5),
            Location(5, 4),
            Location(5, 6),
            Location(6, 5),
        ]
        assert len(small_field.get_orthogonal_locations(Location(0, 9))) == 2

    def test_nearby_locations_radius_three(self, small_field):
        nearby = small_field.get_nearby_locations(Location(5, 5), 3)
        assert len(nearby) == 7 * 7 - 1
        assert nearby == sorted(nearby)
        assert Location(5, 5) not in nearby

    def test_nearby_locations_clipped_at_edges(self, small_field):
        nearby = small_field.get_nearby_locations(Location(0, 0), 3)
        assert len(nearby) == 4 * 4 - 1

    def test_free_adjacent_ignores_plants_and_dead_mobs(self, small_field, place_mob):
        place_mob(small_field, Species.PIG, 4, 4)
        dead = place_mob(small_field, Species.PIG, 4, 5)
        dead.set_dead(DeathCause.OLD_AGE)
        small_field.place_object(Grass(Location(4, 6)), Location(4, 6))

        free = small_field.get_free_adjacent_locations(Location(5, 5))
        assert Location(4, 4) not in free
        assert Location(4, 5) in free
        assert Location(4, 6) in free
        assert len(free) == 7

    def test_free_locations(self, seeded_rng, place_mob):
        field = Field(2, 2, rng=seeded_rng)
        place_mob(field, Species.COW, 0, 0)
        assert field.get_free_locations() == [Location(0, 1), Location(1, 0), Location(1, 1)]

    def test_count_nearby_mobs_counts_living_same_species(self, small_field, place_mob):
        place_mob(small_field, Species.ZOMBIE, 4, 4)
        place_mob(small_field, Species.ZOMBIE, 4, 5)
        place_mob(small_field, Species.CREEPER, 4, 6)
        place_mob(small_field, Species.ZOMBIE, 0, 0)
        dead = place_mob(small_field, Species.ZOMBIE, 6, 6)
        dead.set_dead(DeathCause.STARVATION)

        assert small_field.count_nearby_mobs(Location(5, 5), Species.ZOMBIE) == 2
        assert small_field.count_nearby_mobs(Location(5, 5), Species.CREEPER) == 1


class TestPlacement:
    def test_first_mob_wins(self, small_field):
        loc = Location(2, 2)
        first, second = Mob(Species.COW), Mob(Species.PIG)
        assert small_field.place_object(first, loc)
        assert not small_field.place_object(second, loc)
        assert small_field.get_mob_at(loc) is first
        assert second.location is None
        assert small_field.get_mobs() == [first]

    def test_mob_and_plant_share_a_cell(self, small_field):
        loc = Location(2, 2)
        assert small_field.place_object(Grass(loc), loc)
        assert small_field.place_object(Mob(Species.COW), loc)

    def test_second_plant_is_refused(self, small_field):
        loc = Location(2, 2)
        assert small_field.place_object(Grass(loc), loc)
        assert not small_field.place_object(Grass(loc), loc)
        assert len(small_field.get_plants()) == 1

    def test_dead_occupant_is_displaced(self, small_field):
        loc = Location(2, 2)
        corpse, newcomer = Mob(Species.COW), Mob(Species.COW)
        small_field.place_object(corpse, loc)
        corpse.set_dead(DeathCause.PREDATION)
        assert small_field.place_object(newcomer, loc)
        assert small_field.get_mob_at(loc) is newcomer

    def test_out_of_bounds_placement_is_refused(self, small_field):
        assert not small_field.place_object(Mob(Species.COW), Location(10, 0))
        assert not small_field.place_object(Mob(Species.COW), None)
        assert not small_field.place_object(None, Location(0, 0))

    def test_replacing_a_mob_moves_it(self, small_field):
        mob = Mob(Species.VILLAGER)
        small_field.place_object(mob, Location(1, 1))
        small_field.place_object(mob, Location(1, 2))
        assert small_field.get_mob_at(Location(1, 1)) is None
        assert small_field.get_mob_at(Location(1, 2)) is mob
        assert small_field.get_mobs() == [mob]

    def test_remove_object_clears_cell_and_kills(self, small_field, place_mob):
        cow = place_mob(small_field, Species.COW, 3, 3)
        small_field.remove_object(cow)
        assert not cow.is_alive
        assert cow.location is None
        assert small_field.get_mob_at(Location(3, 3)) is None
        assert small_field.get_mobs() == []

    def test_prune_dead(self, small_field, place_mob):
        alive = place_mob(small_field, Species.COW, 1, 1)
        dead = place_mob(small_field, Species.PIG, 1, 2)
        dead.set_dead(DeathCause.STARVATION)
        grass = Grass(Location(5, 5))
        small_field.place_object(grass, Location(5, 5))
        grass.set_dead()

        removed = small_field.prune_dead()
        assert set(map(id, removed)) == {id(dead), id(grass)}
        assert small_field.get_mobs() == [alive]
        assert small_field.get_plants() == []


class TestPopulation:
    def test_population_counts_living_only(self, small_field, place_mob):
        place_mob(small_field, Species.COW, 0, 0)
        place_mob(small_field, Species.COW, 0, 1)
        dead = place_mob(small_field, Species.COW, 0, 2)
        dead.set_dead(DeathCause.OLD_AGE)
        small_field.place_object(Grass(Location(3, 3)), Location(3, 3))

        assert small_field.get_population(Species.COW) == 2
        assert small_field.get_population(Species.ZOMBIE) == 0
        assert small_field.get_population(PlantKind.GRASS) == 1

    def test_population_details_lists_every_kind(self, small_field, place_mob):
        place_mob(small_field, Species.CREEPER, 0, 0)
        details = small_field.get_population_details()
        assert details == {
            "Cow": 0,
            "Pig": 0,
            "Villager": 0,
            "Zombie": 0,
            "Creeper": 1,
            "Grass": 0,
        }

    def test_registry_keeps_placement_order(self, small_field):
        mobs = [Mob(Species.COW), Mob(Species.ZOMBIE), Mob(Species.PIG)]
        for col, mob in enumerate(reversed(mobs)):
            small_field.place_object(mob, Location(0, col))
        assert small_field.get_mobs() == list(reversed(mobs))
        assert small_field.get_mobs(Species.ZOMBIE) == [mobs[1]]


class TestViability:
    def test_empty_field_is_not_viable(self, small_field):
        assert not small_field.is_viable()

    def test_plants_alone_are_not_viable(self, small_field):
        small_field.place_object(Grass(Location(0, 0)), Location(0, 0))
        assert not small_field.is_viable()

    def test_one_living_mob_is_viable(self, small_field, place_mob):
        mob = place_mob(small_field, Species.VILLAGER, 0, 0)
        assert small_field.is_viable()
        mob.set_dead(DeathCause.DISEASE)
        assert not small_field.is_viable()

    def test_viable_iff_some_species_has_population(self):
        rng = random.Random(7)
        for _ in range(20):
            field = Field(6, 6, rng=rng)
            for loc in field.iter_locations():
                if rng.random() < 0.1:
                    mob = Mob(rng.choice(list(Species)))
                    field.place_object(mob, loc)
                    if rng.random() < 0.5:
                        mob.set_dead(DeathCause.STARVATION)
            any_population = any(field.get_population(s) > 0 for s in Species)
            assert field.is_viable() == any_population
