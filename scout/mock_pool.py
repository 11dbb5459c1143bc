"""Curated fallback results used when no live search is available.

Real, long-lived URLs so downstream audits still have something to open.
The accessibility hints are illustrative, not measured.
"""

from .contracts import RawCandidate

MOCK_SITES: tuple[RawCandidate, ...] = (
    RawCandidate(
        url="https://news.ycombinator.com",
        title="Hacker News",
        snippet="Social news website focusing on computer science and entrepreneurship.",
        problems=["Small font size", "Low contrast metadata", "Tap targets too small on mobile"],
        severity="Medium",
        quick_fix="Increase base font size to 16px and add line-height.",
    ),
    RawCandidate(
        url="https://motherfuckingwebsite.com",
        title="Motherfucking Website",
        snippet="A satirical website about web bloat.",
        problems=["Extreme minimalism", "No branding", "Aggressive language"],
        severity="Low",
        quick_fix="Add basic CSS styling for better readability.",
    ),
    RawCandidate(
        url="https://www.craigslist.org",
        title="craigslist",
        snippet="Local classifieds and forums.",
        problems=["Cluttered links", "No visual hierarchy", "Outdated design patterns"],
        severity="High",
        quick_fix="Organize categories into a grid with icons.",
    ),
    RawCandidate(
        url="https://www.berkshirehathaway.com",
        title="Berkshire Hathaway",
        snippet="Official website of Berkshire Hathaway Inc.",
        problems=["No mobile responsiveness", "Times New Roman default font", "No navigation menu"],
        severity="High",
        quick_fix="Implement a responsive viewport and navigation bar.",
    ),
    RawCandidate(
        url="http://www.arngren.net",
        title="Arngren.net",
        snippet="Norwegian gadget retailer.",
        problems=["Extreme clutter", "Overlapping elements", "Non-standard navigation"],
        severity="High",
        quick_fix="Complete redesign required; start with a clear grid layout.",
    ),
    RawCandidate(
        url="https://lingscars.com",
        title="Lings Cars",
        snippet="UK car leasing website.",
        problems=["Distracting animations", "Autoplaying audio", "Overwhelming information density"],
        severity="High",
        quick_fix="Remove autoplaying elements and simplify the color palette.",
    ),
    RawCandidate(
        url="https://userinyerface.com",
        title="User Inyerface",
        snippet="A challenging exploration of user interactions.",
        problems=["Deceptive patterns", "Confusing forms", "Time pressure"],
        severity="High",
        quick_fix="Adhere to standard form input behaviors.",
    ),
    RawCandidate(
        url="https://validator.w3.org",
        title="W3C Markup Validator",
        snippet="Check the markup (HTML, XHTML, ...) of Web documents.",
        problems=["Dense technical text", "Form labels unclear", "Low contrast errors"],
        severity="Low",
        quick_fix="Improve error message contrast and clarity.",
    ),
)
