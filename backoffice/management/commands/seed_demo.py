"""
Populate the database with demo sports (with form configs), teams, players,
events and blog posts.

    python manage.py seed_demo
    python manage.py seed_demo --reset --teams 2 --players 3

Records are matched on slug, so running it twice doesn't duplicate anything.
"""
from __future__ import annotations

import logging
import random
from datetime import date, timedelta

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from backoffice.utils import generate_slug
from blog.models import Blog
from events.models import Event
from events.services import derive_status
from players.models import Player, Team
from players.services import snapshot_additional_fields
from sports.formconfig import FieldType, parse_form_config
from sports.models import Sport

logger = logging.getLogger(__name__)

IMAGE = "https://placehold.co/600x400?text={}"

SPORTS = [
    {
        "name": "Football",
        "description": "Eleven-a-side football for juniors and seniors.",
        "fields": [
            {"id": "jerseyNumber", "type": "number", "label": "Jersey Number", "required": True},
            {
                "id": "position", "type": "select", "label": "Position", "required": True,
                "options": ["Goalkeeper", "Defender", "Midfielder", "Forward"],
            },
            {"id": "preferredFoot", "type": "radio", "label": "Preferred Foot", "options": ["Left", "Right", "Both"]},
        ],
    },
    {
        "name": "Basketball",
        "description": "Indoor basketball squads training twice a week.",
        "fields": [
            {"id": "jerseyNumber", "type": "number", "label": "Jersey Number", "required": True},
            {
                "id": "position", "type": "select", "label": "Position",
                "options": ["Point Guard", "Shooting Guard", "Small Forward", "Power Forward", "Center"],
            },
            {"id": "height", "type": "number", "label": "Height (cm)", "placeholder": "e.g. 185"},
        ],
    },
    {
        "name": "Cricket",
        "description": "Limited-overs and T20 cricket.",
        "fields": [
            {
                "id": "battingStyle", "type": "radio", "label": "Batting Style", "required": True,
                "options": ["Right-handed", "Left-handed"],
            },
            {
                "id": "roles", "type": "checkbox", "label": "Roles",
                "options": ["Batsman", "Bowler", "Wicket Keeper"],
            },
        ],
    },
    {
        "name": "Volleyball",
        "description": "Beach and indoor volleyball.",
        "fields": [
            {
                "id": "position", "type": "select", "label": "Position", "required": True,
                "options": ["Setter", "Libero", "Outside Hitter", "Middle Blocker", "Opposite"],
            },
        ],
    },
    {
        "name": "Badminton",
        "description": "Singles and doubles badminton.",
        "fields": [
            {"id": "hand", "type": "radio", "label": "Playing Hand", "options": ["Left", "Right"]},
            {
                "id": "events", "type": "checkbox", "label": "Events", "required": True,
                "options": ["Singles", "Doubles", "Mixed Doubles"],
            },
        ],
    },
    {
        "name": "Athletics",
        "description": "Track and field.",
        "fields": [
            {
                "id": "events", "type": "checkbox", "label": "Events", "required": True,
                "options": ["100m", "200m", "400m", "Long Jump", "High Jump"],
            },
            {"id": "memberSince", "type": "date", "label": "Member Since"},
            {"id": "bests", "type": "textarea", "label": "Personal Bests", "placeholder": "Event: time/distance"},
        ],
    },
]

TEAM_SUFFIXES = ["Eagles", "Tigers", "Rovers", "United", "Falcons", "Sharks", "Wolves", "Comets", "Titans", "Stars"]
COACHES = ["Maria Lopez", "Ken Adams", "Aisha Khan", "Tom Weller", "Priya Nair", "Jon Park"]
FIRST_NAMES = ["Alex", "Sam", "Jordan", "Taylor", "Casey", "Riley", "Morgan", "Jamie", "Quinn", "Avery", "Rowan", "Kai"]
LAST_NAMES = ["Smith", "Garcia", "Chen", "Okafor", "Novak", "Silva", "Haddad", "Kowalski", "Ito", "Murphy"]
VENUES = ["Main Stadium", "North Field", "Sports Hall A", "Riverside Courts", "City Arena"]

BLOG_POSTS = [
    ("Season Kick-off Recap", ["news", "football"]),
    ("Five Drills for Faster Footwork", ["training", "football"]),
    ("How We Pick Our Squads", ["club", "teams"]),
    ("Nutrition Basics for Young Athletes", ["health", "training"]),
    ("Meet the New Basketball Coach", ["news", "basketball"]),
    ("Cricket Nets Open on Weekends", ["cricket", "facilities"]),
    ("Volunteering at Club Events", ["club", "community"]),
    ("Recovery Days Matter", ["health"]),
    ("Tournament Weekend Schedule", ["events", "news"]),
    ("Badminton Ladder Results", ["badminton", "results"]),
    ("Track Season Preview", ["athletics", "events"]),
    ("Draft: Summer Camp Plans", ["club"]),
]


def _bounded(value: int, low: int, high: int, name: str) -> int:
    if not low <= value <= high:
        raise CommandError(f"--{name} must be between {low} and {high}")
    return value


def demo_value(rng: random.Random, descriptor):
    """Plausible raw input for one descriptor, before validation."""
    if descriptor.type == FieldType.NUMBER:
        if "height" in descriptor.label.lower():
            return rng.randint(160, 210)
        return rng.randint(1, 99)
    if descriptor.type in (FieldType.SELECT, FieldType.RADIO):
        return rng.choice(descriptor.options)
    if descriptor.type == FieldType.CHECKBOX:
        return rng.sample(list(descriptor.options), k=rng.randint(1, min(2, len(descriptor.options))))
    if descriptor.type == FieldType.DATE:
        return (date(2015, 1, 1) + timedelta(days=rng.randint(0, 3650))).isoformat()
    return f"Demo {descriptor.label.lower()}"


class Command(BaseCommand):
    help = "Create demo sports, teams, players, events and blog posts."

    def add_arguments(self, parser):
        parser.add_argument("--reset", action="store_true", help="Delete all content before seeding.")
        parser.add_argument("--sports", type=int, default=3, help="Number of sports (1-6).")
        parser.add_argument("--teams", type=int, default=4, help="Teams per sport (1-10).")
        parser.add_argument("--players", type=int, default=5, help="Players per team (1-20).")
        parser.add_argument("--events", type=int, default=6, help="Number of events (0-50).")
        parser.add_argument("--blogs", type=int, default=len(BLOG_POSTS), help=f"Blog posts (0-{len(BLOG_POSTS)}).")
        parser.add_argument("--seed", type=int, default=42, help="Random seed, for repeatable data.")

    @transaction.atomic
    def handle(self, *args, **opts):
        sport_count = _bounded(opts["sports"], 1, len(SPORTS), "sports")
        teams_per_sport = _bounded(opts["teams"], 1, len(TEAM_SUFFIXES), "teams")
        players_per_team = _bounded(opts["players"], 1, 20, "players")
        event_count = _bounded(opts["events"], 0, 50, "events")
        blog_count = _bounded(opts["blogs"], 0, len(BLOG_POSTS), "blogs")
        rng = random.Random(opts["seed"])

        if opts["reset"]:
            self.reset()

        sports = [self.seed_sport(entry) for entry in SPORTS[:sport_count]]
        teams = []
        for sport in sports:
            for i in range(teams_per_sport):
                team = self.seed_team(rng, sport, i)
                teams.append(team)
                for j in range(players_per_team):
                    self.seed_player(rng, sport, team, j)
        for i in range(event_count):
            self.seed_event(rng, i, sports, teams)
        for title, tags in BLOG_POSTS[:blog_count]:
            self.seed_blog(title, tags)

        summary = (
            f"Sports: {Sport.objects.count()}, teams: {Team.objects.count()}, players: {Player.objects.count()}, "
            f"events: {Event.objects.count()}, blogs: {Blog.objects.count()}"
        )
        logger.info("Demo data seeded. %s", summary)
        self.stdout.write(self.style.SUCCESS(f"Demo data ready. {summary}"))

    def reset(self):
        # Players and teams go with their sport
        for model in (Blog, Event, Sport):
            deleted, _ = model.objects.all().delete()
            logger.info("Reset: deleted %d %s row(s)", deleted, model._meta.label)
        self.stdout.write(self.style.WARNING("Existing content deleted."))

    def seed_sport(self, entry) -> Sport:
        descriptors = parse_form_config(entry["fields"])
        sport, created = Sport.objects.update_or_create(
            slug=generate_slug(entry["name"]),
            defaults={
                "name": entry["name"],
                "description": entry["description"],
                "image_url": IMAGE.format(entry["name"]),
                "form_config": [d.to_dict() for d in descriptors],
            },
        )
        if created:
            logger.info("Seeded sport %s", sport.slug)
        return sport

    def seed_team(self, rng: random.Random, sport: Sport, index: int) -> Team:
        name = f"{sport.name} {TEAM_SUFFIXES[index]}"
        team, _ = Team.objects.get_or_create(
            slug=generate_slug(name),
            defaults={
                "name": name,
                "sport": sport,
                "description": f"The {name} squad.",
                "image_url": IMAGE.format(generate_slug(name)),
                "coach": rng.choice(COACHES),
            },
        )
        return team

    def seed_player(self, rng: random.Random, sport: Sport, team: Team, index: int) -> Player:
        name = f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
        # Demo names repeat across teams, so the slug carries the team too
        slug = generate_slug(f"{name} {team.name} {index + 1}")
        raw = {d.label: demo_value(rng, d) for d in sport.descriptors}
        player, _ = Player.objects.get_or_create(
            slug=slug,
            defaults={
                "name": name,
                "team": team,
                "sport": sport,
                "age": rng.randint(12, 35),
                "image_url": IMAGE.format(slug),
                "contact": f"{slug}@example.com",
                "additional_fields": snapshot_additional_fields(sport, raw),
            },
        )
        return player

    def seed_event(self, rng: random.Random, index: int, sports: list[Sport], teams: list[Team]) -> Event:
        sport = sports[index % len(sports)]
        name = f"{sport.name} Cup {index + 1}"
        start = timezone.now().replace(minute=0, second=0, microsecond=0) + timedelta(days=rng.randint(-30, 60))
        end = start + timedelta(hours=rng.choice([2, 4, 8, 48]))
        event, created = Event.objects.get_or_create(
            slug=generate_slug(name),
            defaults={
                "name": name,
                "description": f"{sport.name} fixtures hosted by the club.",
                "image_url": IMAGE.format(generate_slug(name)),
                "location": rng.choice(VENUES),
                "start_date": start,
                "end_date": end,
                "status": derive_status(start, end),
                "sport": sport,
            },
        )
        if created:
            pool = [t for t in teams if t.sport_id == sport.pk]
            event.teams.set(rng.sample(pool, k=min(2, len(pool))))
        return event

    def seed_blog(self, title: str, tags: list[str]) -> Blog:
        status = Blog.Status.DRAFT if title.startswith("Draft") else Blog.Status.PUBLISHED
        blog, _ = Blog.objects.get_or_create(
            slug=generate_slug(title),
            defaults={
                "title": title,
                "content": f"{title}.\n\nNews and notes from around the club.",
                "img": IMAGE.format(generate_slug(title)),
                "tags": tags,
                "status": status,
            },
        )
        return blog
