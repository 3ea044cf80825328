# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
# 
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""
Locust load testing configuration for the blog front end.
Browses the home page, the article list and individual articles.
"""

from locust import HttpUser, task, between
import random

class ReaderUser(HttpUser):
    """
    Simulates a reader: lands on the home page, opens the list, reads a few articles.
    """
    wait_time = between(1, 5)

    def on_start(self):
        """Learn the available slugs once per simulated user."""
        self.slugs = []
        with self.client.get("/api/posts?per_page=20", name="/api/posts", catch_response=True) as response:
            if response.status_code == 200:
                self.slugs = [post["slug"] for post in response.json().get("posts", [])]
                response.success()
            else:
                response.failure(f"Could not list posts: {response.status_code}")

    @task(5)
    def home(self):
        self.client.get("/")

    @task(3)
    def articles(self):
        self.client.get("/articles")

    @task(8)
    def read_article(self):
        if not self.slugs:
            return
        self.client.get(f"/articles/{random.choice(self.slugs)}", name="/articles/[slug]")

    @task(1)
    def missing_article(self):
        """Unknown slugs should be a quick 404, not an error."""
        with self.client.get("/articles/this-slug-does-not-exist", name="/articles/[missing]", catch_response=True) as response:
            if response.status_code == 404:
                response.success()
            else:
                response.failure(f"Expected 404, got {response.status_code}")

    @task(1)
    def healthcheck(self):
        self.client.get("/health?c=1")
