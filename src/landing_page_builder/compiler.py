from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping
from urllib.parse import quote

from jinja2 import DictLoader, Environment, TemplateError, select_autoescape
from markupsafe import Markup

from .dictionaries import (
    DEFAULT_ABOUT_IMAGE,
    DEFAULT_ACCENT_COLOR,
    DEFAULT_CTA_IMAGE,
    DEFAULT_HERO_IMAGE,
    DEFAULT_ICON,
    DEFAULT_SECONDARY_COLOR,
)
from .editor import sorted_sections
from .models.page import ColorScheme, LandingPage, utcnow
from .models.section import CustomLayout, Section, SectionVariant

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.html"
STYLES_FILENAME = "styles.css"
SCRIPT_FILENAME = "script.js"
ARTIFACT_FILENAMES = (INDEX_FILENAME, STYLES_FILENAME, SCRIPT_FILENAME)

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title }}</title>
  <link rel="stylesheet" href="styles.css">
  <link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap" rel="stylesheet">
</head>
<body class="{{ body_class }}">
  <header>
    <div class="container">
      <div class="logo">{{ logo }}</div>
      <nav>
        <ul>
          <li><a href="#home">Home</a></li>
          <li><a href="#features">Features</a></li>
          <li><a href="#testimonials">Testimonials</a></li>
          <li><a href="#contact">Contact</a></li>
        </ul>
      </nav>
    </div>
  </header>

  <main>
{% for fragment in fragments %}
{{ fragment }}
{% endfor %}
  </main>

  <footer>
    <div class="container">
      <p>&copy; {{ year }} {{ title }}. All rights reserved.</p>
    </div>
  </footer>

  <script src="script.js"></script>
</body>
</html>
"""

SECTION_TEMPLATES: Mapping[str, str] = {
    SectionVariant.hero.value: """<section id="{{ section.id }}" class="hero-section" style="background-image: linear-gradient(rgba(0, 0, 0, 0.6), rgba(0, 0, 0, 0.6)), url('{{ (content.background_image or default_image) | css_url }}');">
  <div class="container">
    <h1>{{ content.headline }}</h1>
    <p class="hero-subheadline">{{ content.subheadline }}</p>
    <a href="{{ content.cta_link }}" class="cta-button">{{ content.cta_text }}</a>
  </div>
</section>""",
    SectionVariant.about.value: """<section id="{{ section.id }}" class="about-section">
  <div class="container">
    <div class="about-content">
      <div class="about-text">
        <h2>{{ content.title }}</h2>
        <p>{{ content.content }}</p>
      </div>
      <div class="about-image">
        <img src="{{ content.image or default_image }}" alt="About us">
      </div>
    </div>
  </div>
</section>""",
    SectionVariant.features.value: """<section id="{{ section.id }}" class="features-section">
  <div class="container">
    <h2>{{ content.title }}</h2>
{% if content.subtitle %}
    <p class="section-subtitle">{{ content.subtitle }}</p>
{% endif %}
    <div class="features-grid">
{% for feature in content.features %}
      <div class="feature-card">
        <div class="feature-icon" data-icon="{{ feature.icon or default_icon }}">{{ feature.icon or default_icon }}</div>
        <h3>{{ feature.title }}</h3>
        <p>{{ feature.description }}</p>
      </div>
{% endfor %}
    </div>
  </div>
</section>""",
    SectionVariant.testimonials.value: """<section id="{{ section.id }}" class="testimonials-section">
  <div class="container">
    <h2>{{ content.title }}</h2>
    <div class="testimonials-grid">
{% for testimonial in content.testimonials %}
      <div class="testimonial-card">
        <p class="testimonial-quote">"{{ testimonial.quote }}"</p>
        <div class="testimonial-author">
{% if testimonial.avatar %}
          <img class="author-avatar" src="{{ testimonial.avatar }}" alt="{{ testimonial.author }}">
{% endif %}
          <p class="author-name">{{ testimonial.author }}</p>
          <p class="author-role">{{ testimonial.role or "" }}{% if testimonial.company %} at {{ testimonial.company }}{% endif %}</p>
        </div>
      </div>
{% endfor %}
    </div>
  </div>
</section>""",
    SectionVariant.cta.value: """<section id="{{ section.id }}" class="cta-section" style="background-image: linear-gradient(rgba(0, 0, 0, 0.7), rgba(0, 0, 0, 0.7)), url('{{ (content.background_image or default_image) | css_url }}');">
  <div class="container">
    <h2>{{ content.title }}</h2>
{% if content.subtitle %}
    <p class="cta-subtitle">{{ content.subtitle }}</p>
{% endif %}
    <a href="{{ content.button_link }}" class="cta-button">{{ content.button_text }}</a>
  </div>
</section>""",
    SectionVariant.pricing.value: """<section id="{{ section.id }}" class="pricing-section">
  <div class="container">
    <h2>{{ content.title }}</h2>
{% if content.subtitle %}
    <p class="section-subtitle">{{ content.subtitle }}</p>
{% endif %}
    <div class="pricing-grid">
{% for tier in content.tiers %}
      <div class="pricing-card{% if tier.popular %} popular{% endif %}">
{% if tier.popular %}
        <span class="pricing-badge">Most Popular</span>
{% endif %}
        <h3>{{ tier.name }}</h3>
        <p class="pricing-price">{{ tier.price }}</p>
        <p class="pricing-description">{{ tier.description }}</p>
        <ul class="pricing-features">
{% for item in tier.features %}
          <li>{{ item }}</li>
{% endfor %}
        </ul>
        <a href="#contact" class="cta-button">{{ tier.cta_text }}</a>
      </div>
{% endfor %}
    </div>
  </div>
</section>""",
    # ``content`` and ``custom_html`` of a custom section are markup by contract.
    SectionVariant.custom.value: """<section id="{{ section.id }}" class="custom-section custom-{{ layout }}">
  <div class="container">
    <h2>{{ content.title }}</h2>
{% if layout == "custom-html" %}
    <div class="custom-content">{{ (content.custom_html or content.content) | safe }}</div>
{% elif layout == "text-image" %}
    <div class="custom-content custom-text-image">
      <div class="custom-text">{{ content.content | safe }}</div>
{% if content.image %}
      <div class="custom-image"><img src="{{ content.image }}" alt="{{ content.title }}"></div>
{% endif %}
    </div>
{% else %}
    <div class="custom-content">{{ content.content | safe }}</div>
{% endif %}
  </div>
</section>""",
}

DEFAULT_IMAGES: Mapping[str, str] = {
    SectionVariant.hero.value: DEFAULT_HERO_IMAGE,
    SectionVariant.about.value: DEFAULT_ABOUT_IMAGE,
    SectionVariant.cta.value: DEFAULT_CTA_IMAGE,
}

STYLESHEET_TEMPLATE = """:root {
  --primary-color: {{ colors.primary }};
  --secondary-color: {{ colors.secondary or default_secondary }};
  --background-color: {{ colors.background }};
  --text-color: {{ colors.text }};
  --accent-color: {{ colors.accent or default_accent }};
  --font-heading: {{ fonts.heading }};
  --font-body: {{ fonts.body }};
}

* {
  margin: 0;
  padding: 0;
  box-sizing: border-box;
}

body {
  font-family: var(--font-body);
  color: var(--text-color);
  background-color: var(--background-color);
  line-height: 1.6;
}

.dark-mode {
  --background-color: #121212;
  --text-color: #ffffff;
}

.container {
  width: 100%;
  max-width: 1200px;
  margin: 0 auto;
  padding: 0 1rem;
}

h1, h2, h3, h4, h5, h6 {
  font-family: var(--font-heading);
  margin-bottom: 1rem;
  line-height: 1.2;
}

h1 { font-size: 3rem; }
h2 { font-size: 2.5rem; }
h3 { font-size: 1.5rem; }

p { margin-bottom: 1rem; }

a {
  color: var(--primary-color);
  text-decoration: none;
}

ul { list-style: none; }

/* Header */
header {
  background-color: var(--background-color);
  box-shadow: 0 2px 10px rgba(0, 0, 0, 0.1);
  position: sticky;
  top: 0;
  z-index: 100;
  padding: 1rem 0;
}

header .container {
  display: flex;
  justify-content: space-between;
  align-items: center;
}

.logo {
  font-size: 1.5rem;
  font-weight: 700;
  color: var(--primary-color);
}

nav ul { display: flex; }
nav ul li { margin-left: 1.5rem; }
nav ul li a { transition: color 0.3s ease; }
nav ul li a:hover { color: var(--primary-color); }

/* Hero */
.hero-section {
  background-size: cover;
  background-position: center;
  color: white;
  text-align: center;
  padding: 8rem 0;
}

.hero-subheadline {
  font-size: 1.5rem;
  margin: 0 auto 2rem;
  max-width: 700px;
}

.cta-button {
  display: inline-block;
  background-color: var(--primary-color);
  color: white;
  padding: 0.75rem 1.5rem;
  border-radius: 4px;
  font-weight: 600;
  transition: background-color 0.3s ease;
}

.cta-button:hover { background-color: var(--secondary-color); }

/* About */
.about-section {
  padding: 5rem 0;
  background-color: #f9fafb;
}

.dark-mode .about-section { background-color: #1a1a1a; }

.about-content {
  display: flex;
  align-items: center;
  gap: 2rem;
}

.about-text, .about-image { flex: 1; }

.about-image img {
  width: 100%;
  border-radius: 8px;
  box-shadow: 0 4px 20px rgba(0, 0, 0, 0.1);
}

/* Features */
.features-section {
  padding: 5rem 0;
  text-align: center;
}

.section-subtitle {
  font-size: 1.25rem;
  margin: 0 auto 3rem;
  max-width: 700px;
}

.features-grid {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(250px, 1fr));
  gap: 2rem;
  margin-top: 3rem;
}

.feature-card {
  background-color: white;
  padding: 2rem;
  border-radius: 8px;
  box-shadow: 0 4px 20px rgba(0, 0, 0, 0.05);
  transition: transform 0.3s ease;
}

.dark-mode .feature-card { background-color: #1e1e1e; }
.feature-card:hover { transform: translateY(-5px); }

.feature-icon {
  font-size: 2rem;
  color: var(--primary-color);
  margin-bottom: 1rem;
}

/* Testimonials */
.testimonials-section {
  padding: 5rem 0;
  background-color: #f9fafb;
  text-align: center;
}

.dark-mode .testimonials-section { background-color: #1a1a1a; }

.testimonials-grid {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(300px, 1fr));
  gap: 2rem;
  margin-top: 3rem;
}

.testimonial-card {
  background-color: white;
  padding: 2rem;
  border-radius: 8px;
  box-shadow: 0 4px 20px rgba(0, 0, 0, 0.05);
  text-align: left;
}

.dark-mode .testimonial-card { background-color: #1e1e1e; }

.testimonial-quote {
  font-style: italic;
  margin-bottom: 1.5rem;
}

.author-avatar {
  width: 48px;
  height: 48px;
  border-radius: 50%;
  margin-bottom: 0.5rem;
}

.author-name {
  font-weight: 600;
  margin-bottom: 0.25rem;
}

.author-role {
  font-size: 0.875rem;
  color: #6b7280;
}

.dark-mode .author-role { color: #9ca3af; }

/* Pricing */
.pricing-section {
  padding: 5rem 0;
  text-align: center;
}

.pricing-grid {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(260px, 1fr));
  gap: 2rem;
  margin-top: 3rem;
}

.pricing-card {
  position: relative;
  background-color: white;
  padding: 2rem;
  border-radius: 8px;
  border: 1px solid rgba(0, 0, 0, 0.08);
  box-shadow: 0 4px 20px rgba(0, 0, 0, 0.05);
}

.pricing-card.popular { border: 2px solid var(--primary-color); }
.dark-mode .pricing-card { background-color: #1e1e1e; }

.pricing-badge {
  position: absolute;
  top: -0.75rem;
  left: 50%;
  transform: translateX(-50%);
  background-color: var(--accent-color);
  color: white;
  font-size: 0.75rem;
  font-weight: 600;
  padding: 0.25rem 0.75rem;
  border-radius: 999px;
}

.pricing-price {
  font-size: 2rem;
  font-weight: 700;
  color: var(--primary-color);
}

.pricing-features {
  margin: 1.5rem 0;
  text-align: left;
}

.pricing-features li { padding: 0.25rem 0; }

/* CTA */
.cta-section {
  background-size: cover;
  background-position: center;
  color: white;
  text-align: center;
  padding: 5rem 0;
}

.cta-subtitle {
  font-size: 1.25rem;
  margin: 0 auto 2rem;
  max-width: 700px;
}

/* Custom */
.custom-section { padding: 5rem 0; }
.custom-content { margin-top: 2rem; }

.custom-text-image {
  display: flex;
  align-items: center;
  gap: 2rem;
}

.custom-text, .custom-image { flex: 1; }

.custom-image img {
  width: 100%;
  border-radius: 8px;
}

/* Footer */
footer {
  background-color: var(--background-color);
  padding: 2rem 0;
  text-align: center;
  border-top: 1px solid rgba(0, 0, 0, 0.1);
}

.dark-mode footer { border-top-color: rgba(255, 255, 255, 0.1); }

/* Responsive */
@media (max-width: 768px) {
  h1 { font-size: 2.5rem; }
  h2 { font-size: 2rem; }
  .about-content, .custom-text-image { flex-direction: column; }
  nav ul { display: none; }
}
"""

SCRIPT = """document.addEventListener('DOMContentLoaded', function () {
  // Smooth scrolling for anchor links
  document.querySelectorAll('a[href^="#"]').forEach(function (anchor) {
    anchor.addEventListener('click', function (event) {
      var targetId = this.getAttribute('href');
      if (targetId === '#') return;

      var targetElement = document.querySelector(targetId);
      if (!targetElement) return;

      event.preventDefault();
      window.scrollTo({
        top: targetElement.offsetTop - 70, // header height
        behavior: 'smooth'
      });
    });
  });

  // Reveal elements as they scroll into view
  var selectors = '.feature-card, .testimonial-card, .pricing-card, .about-image, h2';
  var elements = document.querySelectorAll(selectors);

  elements.forEach(function (element) {
    element.style.opacity = '0';
    element.style.transform = 'translateY(20px)';
    element.style.transition = 'opacity 0.5s ease, transform 0.5s ease';
  });

  var animateOnScroll = function () {
    elements.forEach(function (element) {
      var position = element.getBoundingClientRect().top;
      if (position < window.innerHeight - 100) {
        element.style.opacity = '1';
        element.style.transform = 'translateY(0)';
      }
    });
  };

  animateOnScroll();
  window.addEventListener('scroll', animateOnScroll);
});
"""


@dataclass(frozen=True)
class CompiledSite:
    markup: str
    stylesheet: str
    script: str

    def files(self) -> dict[str, str]:
        return {
            INDEX_FILENAME: self.markup,
            STYLES_FILENAME: self.stylesheet,
            SCRIPT_FILENAME: self.script,
        }


# Everything outside this set is percent-encoded, so a URL cannot close url('...').
_CSS_URL_SAFE = ":/?#[]@!$&*+,;=%~"


def css_url(value: object) -> str:
    return quote(str(value), safe=_CSS_URL_SAFE)


def _build_environment() -> Environment:
    templates = {f"sections/{variant}.html": source for variant, source in SECTION_TEMPLATES.items()}
    templates["page.html"] = PAGE_TEMPLATE
    templates["styles.css"] = STYLESHEET_TEMPLATE
    env = Environment(
        loader=DictLoader(templates),
        autoescape=select_autoescape(enabled_extensions=("html",), default=False),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["css_url"] = css_url
    return env


class TemplateCompiler:
    """Compiles a landing page into static ``index.html``, ``styles.css`` and ``script.js``.

    Output depends only on the page content, except for the footer year which
    follows the wall clock unless ``year`` is given.
    """

    def __init__(self) -> None:
        self._env = _build_environment()

    def compile(self, page: LandingPage, *, year: int | None = None) -> CompiledSite:
        return CompiledSite(
            markup=self.render_markup(page, year=year),
            stylesheet=self.render_stylesheet(page),
            script=SCRIPT,
        )

    def render_markup(self, page: LandingPage, *, year: int | None = None) -> str:
        rendered = (self.render_section(section) for section in sorted_sections(page))
        fragments = [Markup(fragment) for fragment in rendered if fragment]
        title = page.title
        return self._env.get_template("page.html").render(
            title=title,
            logo=title.split(" ")[0] if title else "",
            body_class="dark-mode" if page.theme.color_scheme == ColorScheme.dark else "",
            fragments=fragments,
            year=year if year is not None else utcnow().year,
        )

    def render_section(self, section: Section) -> str:
        """Render one section; unknown variants and unrenderable content yield ``""``."""
        variant = getattr(section, "variant", None)
        if variant not in SECTION_TEMPLATES:
            logger.warning("Skipping section with unknown variant", extra={"variant": variant})
            return ""
        context: dict[str, object] = {
            "section": section,
            "content": section.content,
            "default_image": DEFAULT_IMAGES.get(variant),
            "default_icon": DEFAULT_ICON,
        }
        try:
            if variant == SectionVariant.custom.value:
                context["layout"] = CustomLayout(section.content.layout).value
            return self._env.get_template(f"sections/{variant}.html").render(**context)
        except (AttributeError, TypeError, ValueError, TemplateError):
            logger.warning(
                "Skipping section with unrenderable content",
                exc_info=True,
                extra={"variant": variant, "section_id": getattr(section, "id", None)},
            )
            return ""

    def render_stylesheet(self, page: LandingPage) -> str:
        return self._env.get_template("styles.css").render(
            colors=page.theme.colors,
            fonts=page.theme.fonts,
            default_secondary=DEFAULT_SECONDARY_COLOR,
            default_accent=DEFAULT_ACCENT_COLOR,
        )


__all__ = [
    "TemplateCompiler",
    "CompiledSite",
    "css_url",
    "SCRIPT",
    "ARTIFACT_FILENAMES",
    "INDEX_FILENAME",
    "STYLES_FILENAME",
    "SCRIPT_FILENAME",
]
