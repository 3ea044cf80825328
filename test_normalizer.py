#!/usr/bin/env python3
"""
Unit tests for the post model and the content normalizer.
"""

import os
import time
import unittest
from unittest.mock import patch
from blog.models.post import Post, PostPage
from blog.normalizer import (
    HTML_ENTITIES,
    PLACEHOLDER_IMAGE_URL,
    UNKNOWN_AUTHOR,
    author_name,
    excerpt_text,
    featured_image_alt,
    featured_image_url,
    format_date,
    has_featured_image,
    strip_html,
)

def sample_post(**overrides):
    raw = {
        "id": 42,
        "date": "2024-03-05T10:00:00",
        "slug": "hello-world",
        "title": {"rendered": "Hello &amp; <em>Welcome</em>"},
        "content": {"rendered": "<p>Body</p>"},
        "excerpt": {"rendered": "<p>It&#8217;s a short excerpt&#8230;</p>\n"},
        "author": 3,
        "featured_media": 7,
        "_embedded": {
            "wp:featuredmedia": [{
                "id": 7,
                "source_url": "http://localhost:8080/wp-content/uploads/2024/03/hero.jpg",
                "alt_text": "A hero image",
                "media_details": {"width": 1200, "height": 630},
            }],
            "author": [{"id": 3, "name": "Jane Writer", "slug": "jane"}],
        },
    }
    raw.update(overrides)
    return Post(raw)

class TestStripHtml(unittest.TestCase):
    """Test cases for strip_html."""

    def test_removes_tags(self):
        self.assertEqual(strip_html("<p>Hello <b>World</b></p>"), "Hello World")

    def test_decodes_numeric_and_named_references(self):
        self.assertEqual(strip_html("It&#8217;s &amp; &#x2014; great"), "It's & — great")

    def test_decodes_every_table_entry(self):
        markup = " ".join(HTML_ENTITIES.keys())
        text = strip_html(markup)
        for entity in HTML_ENTITIES:
            self.assertNotIn(entity, text)

    def test_decodes_decimal_and_hex(self):
        self.assertEqual(strip_html("&#65;&#x42;&#X43;"), "ABC")

    def test_single_pass_decode(self):
        self.assertEqual(strip_html("&amp;lt;"), "&lt;")

    def test_unknown_and_invalid_references_are_kept(self):
        self.assertEqual(strip_html("&bogus; &#1114112; &#0;"), "&bogus; &#1114112; &#0;")

    def test_trims_whitespace(self):
        self.assertEqual(strip_html("  <p>\n Text \n</p>  "), "Text")

    def test_nbsp_becomes_space(self):
        self.assertEqual(strip_html("a&nbsp;b"), "a b")

    def test_malformed_markup_does_not_raise(self):
        self.assertEqual(strip_html("<p>Unclosed <b"), "Unclosed <b")
        self.assertEqual(strip_html("a < b > c"), "a  c")
        self.assertEqual(strip_html("<div\nclass='x'>multi</div>"), "multi")

    def test_empty_and_none(self):
        self.assertEqual(strip_html(""), "")
        self.assertEqual(strip_html(None), "")

    def test_idempotent(self):
        samples = [
            "<p>Hello <b>World</b></p>",
            "It&#8217;s &amp; &#x2014; great",
            "Plain text, already clean.",
            "<h2>Q&amp;A</h2>&hellip;",
            "  spaced  ",
        ]
        for sample in samples:
            once = strip_html(sample)
            self.assertEqual(strip_html(once), once, sample)

    def test_escaped_markup_is_not_idempotent(self):
        # tags are removed before decoding, so escaped markup survives one pass as real markup
        once = strip_html("Using the &lt;div&gt; tag")
        self.assertEqual(once, "Using the <div> tag")
        self.assertEqual(strip_html(once), "Using the  tag")

class TestPostAccessors(unittest.TestCase):
    """Test cases for the featured image, author and excerpt helpers."""

    def test_post_parses_rendered_fields(self):
        post = sample_post()
        self.assertEqual(post.id, 42)
        self.assertEqual(post.slug, "hello-world")
        self.assertEqual(post.title, "Hello &amp; <em>Welcome</em>")
        self.assertEqual(post.embedded_media.width, 1200)
        self.assertEqual(post.embedded_author.name, "Jane Writer")

    def test_featured_image_url(self):
        post = sample_post()
        self.assertEqual(featured_image_url(post), "http://localhost:8080/wp-content/uploads/2024/03/hero.jpg")
        self.assertTrue(has_featured_image(post))

    def test_featured_image_url_without_embeds(self):
        post = sample_post(_embedded=None)
        self.assertIsNone(post.embedded_media)
        self.assertEqual(featured_image_url(post), PLACEHOLDER_IMAGE_URL)
        self.assertFalse(has_featured_image(post))

    def test_featured_image_url_with_empty_media_list(self):
        post = sample_post(_embedded={"wp:featuredmedia": []})
        self.assertEqual(featured_image_url(post), PLACEHOLDER_IMAGE_URL)

    def test_embedded_error_object_counts_as_absent(self):
        post = sample_post(_embedded={
            "wp:featuredmedia": [{"code": "rest_forbidden", "message": "Sorry", "data": {"status": 401}}],
            "author": [{"code": "rest_user_invalid_id"}],
        })
        self.assertEqual(featured_image_url(post), PLACEHOLDER_IMAGE_URL)
        self.assertEqual(author_name(post), UNKNOWN_AUTHOR)

    def test_featured_image_alt(self):
        self.assertEqual(featured_image_alt(sample_post()), "A hero image")

    def test_featured_image_alt_falls_back_to_title(self):
        post = sample_post(_embedded={"wp:featuredmedia": [{"id": 7, "source_url": "/x.jpg", "alt_text": ""}]})
        self.assertEqual(featured_image_alt(post), "Hello & Welcome")
        self.assertEqual(featured_image_alt(sample_post(_embedded=None)), "Hello & Welcome")

    def test_author_name(self):
        self.assertEqual(author_name(sample_post()), "Jane Writer")

    def test_author_name_without_embedded_author(self):
        post = sample_post(_embedded={"wp:featuredmedia": []})
        self.assertEqual(author_name(post), "Unknown Author")
        self.assertEqual(author_name(sample_post(_embedded={"author": [{"id": 3, "name": ""}]})), UNKNOWN_AUTHOR)

    def test_missing_fields_do_not_raise(self):
        post = Post({"id": 1, "slug": "bare"})
        self.assertEqual(post.title, "")
        self.assertEqual(featured_image_alt(post), "")
        self.assertEqual(excerpt_text(post), "")
        self.assertEqual(format_date(post.date), "")

    def test_excerpt_text(self):
        post = sample_post()
        self.assertEqual(excerpt_text(post), "It's a short excerpt…")
        self.assertEqual(excerpt_text(post, 4), "It's")

    def test_post_page_defaults(self):
        page = PostPage([sample_post()], page=1, per_page=10)
        self.assertEqual(page.total_posts, 1)
        self.assertEqual(page.total_pages, 1)
        self.assertFalse(page.has_next)
        self.assertFalse(page.has_previous)

class TestFormatDate(unittest.TestCase):
    """Test cases for format_date."""

    def test_format(self):
        self.assertEqual(format_date("2024-03-05T10:00:00Z"), "March 5, 2024")
        self.assertEqual(format_date("2023-12-31T23:59:59"), "December 31, 2023")
        self.assertEqual(format_date("2025-01-01"), "January 1, 2025")

    def test_offset_does_not_shift_the_day(self):
        self.assertEqual(format_date("2024-03-05T23:30:00-08:00"), "March 5, 2024")

    @unittest.skipUnless(hasattr(time, "tzset"), "time.tzset is not available")
    def test_stable_across_time_zones(self):
        for tz in ("UTC", "America/Los_Angeles", "Asia/Tokyo", "Pacific/Kiritimati"):
            with patch.dict(os.environ, {"TZ": tz}):
                time.tzset()
                self.assertEqual(format_date("2024-03-05T10:00:00Z"), "March 5, 2024")
        time.tzset()

    def test_unparseable_input_is_returned(self):
        self.assertEqual(format_date("not a date"), "not a date")
        self.assertEqual(format_date("2024-13-01T00:00:00"), "2024-13-01T00:00:00")
        self.assertEqual(format_date(""), "")
        self.assertEqual(format_date(None), "")

if __name__ == '__main__':
    unittest.main()
