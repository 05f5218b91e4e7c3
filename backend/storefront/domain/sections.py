import copy
from typing import Any, Dict

# Section types the builder knows how to render
SECTION_TYPES: Dict[str, str] = {
    "hero": "Hero Section",
    "features": "Features Grid",
    "product_grid": "Product Grid",
    "testimonials": "Testimonials",
    "newsletter": "Newsletter",
    "gallery": "Gallery",
    "faq": "FAQ",
    "custom_html": "Custom HTML",
}

# Templates for quick setup
TEMPLATES: Dict[str, Dict[str, Any]] = {
    "minimal": {
        "name": "Minimal",
        "description": "Clean and simple",
        "sections": ["hero", "product_grid"],
    },
    "standard": {
        "name": "Standard",
        "description": "Hero, Features, Products",
        "sections": ["hero", "features", "product_grid"],
    },
    "full": {
        "name": "Full Experience",
        "description": "Complete storefront",
        "sections": ["hero", "features", "product_grid", "testimonials", "faq", "newsletter"],
    },
    "landing": {
        "name": "Landing Page",
        "description": "Conversion focused",
        "sections": ["hero", "gallery", "testimonials", "newsletter"],
    },
}

_SECTION_DEFAULTS: Dict[str, Dict[str, Dict[str, Any]]] = {
    "hero": {
        "content": {
            "heading_line_1": "Premium",
            "heading_line_2": "Flower",
            "heading_line_3": "Delivered",
            "subheading": "Curated strains. Same-day delivery.",
            "cta_primary_text": "Explore Collection",
            "cta_primary_link": "/shop",
            "cta_secondary_text": "View Menu",
            "cta_secondary_link": "/menu",
            "trust_badges": True,
        },
        "styles": {
            "background_gradient_start": "#000000",
            "background_gradient_end": "#022c22",
            "text_color": "#ffffff",
            "accent_color": "#34d399",
        },
    },
    "features": {
        "content": {
            "heading_small": "The Difference",
            "heading_large": "Excellence in Every Detail",
            "features": [
                {"icon": "clock", "title": "Same-Day Delivery", "description": "Order before 9 PM for delivery within the hour."},
                {"icon": "shield", "title": "Lab Verified", "description": "Every strain tested for purity and quality."},
                {"icon": "lock", "title": "Discreet Service", "description": "Unmarked packaging. Your privacy is our priority."},
                {"icon": "star", "title": "Premium Selection", "description": "Hand-picked strains. Top-shelf quality."},
            ],
        },
        "styles": {"background_color": "#171717", "text_color": "#ffffff", "icon_color": "#34d399"},
    },
    "product_grid": {
        "content": {
            "heading": "Shop Premium Collection",
            "subheading": "Premium indoor-grown flower from licensed cultivators",
            "show_search": True,
            "show_categories": True,
            "initial_categories_shown": 2,
            "show_premium_filter": True,
        },
        "styles": {"background_color": "#f4f4f5", "text_color": "#000000", "accent_color": "#10b981"},
    },
    "testimonials": {
        "content": {
            "heading": "What Our Customers Say",
            "subheading": "Join thousands of satisfied customers",
            "testimonials": [
                {"name": "Sarah M.", "role": "Verified Customer", "quote": "The quality is unmatched. Fast delivery and exactly what I was looking for.", "rating": 5},
                {"name": "Michael R.", "role": "Regular Customer", "quote": "Best service in the city. Professional, discreet, and always reliable.", "rating": 5},
                {"name": "Jessica L.", "role": "New Customer", "quote": "Impressed with the selection and the speed of delivery. Highly recommend!", "rating": 5},
            ],
        },
        "styles": {
            "background_color": "#ffffff",
            "text_color": "#000000",
            "accent_color": "#10b981",
            "card_background": "#f9fafb",
        },
    },
    "newsletter": {
        "content": {
            "heading": "Stay in the Loop",
            "subheading": "Subscribe for exclusive drops, deals, and updates.",
            "button_text": "Subscribe",
            "placeholder_text": "Enter your email",
            "success_message": "Thanks for subscribing!",
        },
        "styles": {
            "background_gradient_start": "#000000",
            "background_gradient_end": "#1f2937",
            "text_color": "#ffffff",
            "accent_color": "#10b981",
            "button_color": "#10b981",
        },
    },
    "gallery": {
        "content": {
            "heading": "Gallery",
            "subheading": "A curated visual experience",
            "images": [
                {"url": "https://images.unsplash.com/photo-1616486338812-3dadae4b4ace?w=600", "alt": "Product 1"},
                {"url": "https://images.unsplash.com/photo-1586023492125-27b2c045efd7?w=600", "alt": "Product 2"},
                {"url": "https://images.unsplash.com/photo-1567016376408-0226e4d0c1ea?w=600", "alt": "Product 3"},
                {"url": "https://images.unsplash.com/photo-1618221195710-dd6b41faaea6?w=600", "alt": "Product 4"},
            ],
        },
        "styles": {"background_color": "#000000", "text_color": "#ffffff", "accent_color": "#10b981"},
    },
    "faq": {
        "content": {
            "heading": "Frequently Asked Questions",
            "subheading": "Got questions? We've got answers.",
            "faqs": [
                {"question": "What are your delivery hours?", "answer": "We deliver 7 days a week from 10 AM to 10 PM. Same-day delivery available."},
                {"question": "How do I track my order?", "answer": "You'll receive a tracking link via SMS and email once dispatched."},
                {"question": "What payment methods do you accept?", "answer": "We accept cash, debit cards, and all major credit cards."},
                {"question": "Is there a minimum order?", "answer": "Minimum order is $50 for delivery. Orders above $100 get free delivery."},
            ],
        },
        "styles": {
            "background_color": "#f9fafb",
            "text_color": "#000000",
            "accent_color": "#10b981",
            "border_color": "#e5e7eb",
        },
    },
    "custom_html": {
        "content": {"html_content": "<p>Add your custom HTML content here</p>", "section_title": ""},
        "styles": {
            "background_color": "#ffffff",
            "text_color": "#000000",
            "padding_y": "4rem",
            "max_width": "1200px",
        },
    },
}


def section_defaults(section_type: str) -> Dict[str, Dict[str, Any]]:
    """
    Default content and styles for a section type.

    Unknown types get empty mappings so newer section types stored by
    other clients still load.
    """
    defaults = _SECTION_DEFAULTS.get(section_type, {"content": {}, "styles": {}})
    return copy.deepcopy(defaults)


def is_known_section_type(section_type: str) -> bool:
    return section_type in SECTION_TYPES
