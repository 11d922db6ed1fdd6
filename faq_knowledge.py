"""
faq_knowledge.py  –  ProjectHub assistant knowledge base
=========================================================
Static, process-wide configuration consumed by the chatbot and the
conversation controller.  Everything here is built once at import time and
never written afterwards.

Contents
--------
FAQ_ENTRIES        – keyword → category → candidate responses (declaration order matters)
FALLBACK_RESPONSES – replies used when nothing matches
WIDGET_GREETING    – first bot line of the sidebar widget
NAME_PROMPT        – first bot line of the landing-page assistant
JOKES              – landing-page icebreakers
SCRIPTED_TOPICS    – landing-page topic handlers (substring triggers → template)
QUICK_ACTIONS      – canned widget phrases
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class FAQEntry:
    """One intent of the knowledge base.

    ``category`` is a bookkeeping label only; matching never looks at it.
    """

    keywords: tuple[str, ...]
    responses: tuple[str, ...]
    category: str

    def __post_init__(self) -> None:
        if not self.keywords:
            raise ValueError(f"FAQ entry '{self.category}' has no keywords.")
        if not self.responses:
            raise ValueError(f"FAQ entry '{self.category}' has no responses.")
        for kw in self.keywords:
            if not kw or kw != kw.strip().lower():
                raise ValueError(
                    f"FAQ entry '{self.category}': keyword {kw!r} must be non-empty lowercase text."
                )


@dataclass(frozen=True)
class ScriptedTopic:
    """Landing-page topic: any trigger found in the query selects ``template``.

    ``template`` may reference ``{user_name}``.
    """

    name: str
    triggers: tuple[str, ...]
    template: str

    def render(self, user_name: str) -> str:
        return self.template.format(user_name=user_name)


def _entry(keywords: Iterable[str], responses: Iterable[str], category: str) -> FAQEntry:
    return FAQEntry(tuple(keywords), tuple(responses), category)


# ═══════════════════════════════════════════════════════════════════════════
#  FAQ ENTRIES
# ═══════════════════════════════════════════════════════════════════════════
# The broad "what/how/when" entry must stay last so it never shadows a
# specific intent.
FAQ_ENTRIES: tuple[FAQEntry, ...] = (

    # ── Greetings ────────────────────────────────────────────────────────────
    _entry(
        ["hello", "hi", "hey", "greetings", "good morning", "good afternoon", "good evening"],
        [
            "Hello! 👋 How can I help you today?",
            "Hi there! What would you like to know?",
            "Hey! I'm here to help. What's your question?",
        ],
        "greeting",
    ),
    _entry(
        ["how are you", "how do you do", "whats up", "what's up"],
        [
            "I'm doing great, thanks for asking! How can I assist you?",
            "I'm here and ready to help! What do you need?",
        ],
        "greeting",
    ),

    # ── Small talk ───────────────────────────────────────────────────────────
    _entry(
        ["thanks", "thank you", "appreciate", "grateful"],
        [
            "You're welcome! Happy to help! 😊",
            "Glad I could help! Let me know if you need anything else.",
            "Anytime! Feel free to ask more questions.",
        ],
        "gratitude",
    ),
    _entry(
        ["yes", "yeah", "yep", "sure", "okay", "ok", "correct", "right"],
        [
            "Great! How else can I assist you?",
            "Perfect! Is there anything else you'd like to know?",
            "Awesome! Let me know if you have more questions.",
        ],
        "affirmative",
    ),
    _entry(
        ["no", "nope", "not really", "negative", "don't", "dont"],
        [
            "No problem! Feel free to ask if you need anything else.",
            "Understood. I'm here if you have other questions!",
            "Alright! Let me know how I can help.",
        ],
        "negative",
    ),
    _entry(
        ["bye", "goodbye", "see you", "later", "exit"],
        [
            "Goodbye! Have a great day! 👋",
            "See you later! Feel free to come back anytime.",
            "Take care! I'll be here if you need me.",
        ],
        "farewell",
    ),

    # ── Platform features ────────────────────────────────────────────────────
    _entry(
        ["apply", "application", "how to apply", "submit application"],
        [
            "To apply for a project:\n"
            "1. Go to the Projects page\n"
            "2. Browse available projects\n"
            "3. Click 'Apply Now' on your chosen project\n"
            "4. Fill in your details and motivation\n"
            "5. Submit your application!\n\n"
            "You'll receive notifications about your application status.",
        ],
        "application",
    ),
    _entry(
        ["project", "projects", "available projects", "find projects"],
        [
            "You can find all available projects on the Projects page! "
            "Use filters to search by category, difficulty, or technologies. Each project shows:\n"
            "- Description and requirements\n"
            "- Team size\n"
            "- Required skills\n"
            "- Application deadline",
        ],
        "projects",
    ),
    _entry(
        ["resume", "cv", "build resume", "create resume"],
        [
            "To create your resume:\n"
            "1. Go to the Resume page\n"
            "2. Click 'Blank resume' or choose a template\n"
            "3. Fill in your details (personal info, experience, skills)\n"
            "4. Run ATS analysis to optimize your resume\n"
            "5. Download or share!\n\n"
            "Tip: Aim for an ATS score of 80+ for better visibility.",
        ],
        "resume",
    ),
    _entry(
        ["test", "tests", "skill test", "assessment", "exam"],
        [
            "Skill tests help validate your expertise! Here's how:\n"
            "1. Go to the Tests page\n"
            "2. Browse available tests by role/difficulty\n"
            "3. Click 'Start test' when ready\n"
            "4. Complete within the time limit\n"
            "5. Get instant results!\n\n"
            "⚠️ Anti-cheat is enabled - stay focused in the browser tab.",
        ],
        "tests",
    ),
    _entry(
        ["certificate", "certificates", "certification"],
        [
            "Earn blockchain-verified certificates by:\n"
            "- Completing projects successfully\n"
            "- Passing skill tests\n"
            "- Contributing to team goals\n\n"
            "All certificates are tamper-proof and can be verified on-chain! "
            "View yours on the Certificates page.",
        ],
        "certificates",
    ),
    _entry(
        ["notification", "notifications", "alerts"],
        [
            "Stay updated with notifications about:\n"
            "- Application status (approved/rejected/shortlisted)\n"
            "- Test assignments\n"
            "- Interview schedules\n"
            "- Certificate issuance\n\n"
            "Check the Notifications page or click the bell icon in the navbar!",
        ],
        "notifications",
    ),
    _entry(
        ["profile", "edit profile", "update profile", "photo", "avatar"],
        [
            "Update your profile anytime:\n"
            "1. Go to Profile page\n"
            "2. Upload a profile photo (max 5MB)\n"
            "3. Update personal details\n"
            "4. Add skills and links (LinkedIn, GitHub)\n"
            "5. Change password if needed\n\n"
            "Complete profile = better visibility to recruiters!",
        ],
        "profile",
    ),
    _entry(
        ["settings", "preferences", "account settings"],
        [
            "Customize your experience in Settings:\n"
            "- Notification preferences (email, SMS, push)\n"
            "- Privacy controls\n"
            "- Language and timezone\n"
            "- Theme preferences\n"
            "- Export or delete your data",
        ],
        "settings",
    ),
    _entry(
        ["password", "forgot password", "reset password", "change password"],
        [
            "To change your password:\n"
            "1. Go to Profile page\n"
            "2. Scroll to 'Change Password' section\n"
            "3. Enter current password\n"
            "4. Enter new password\n"
            "5. Confirm and save\n\n"
            "Forgot password? Use the 'Forgot Password' link on the login page.",
        ],
        "password",
    ),
    _entry(
        ["help", "support", "contact", "issue", "problem"],
        [
            "Need help? Here are your options:\n"
            "📧 Email: support@projecthub.com\n"
            "💬 Live chat: Available 9 AM - 6 PM\n"
            "📚 Documentation: Check the Help Center\n"
            "🐛 Bug report: Use the feedback button\n\n"
            "We're here to assist you!",
        ],
        "support",
    ),
    _entry(
        ["ats", "ats score", "resume score"],
        [
            "ATS (Applicant Tracking System) score measures how well your resume matches job requirements:\n\n"
            "✅ 80-100: Excellent\n"
            "⚠️ 60-79: Good, but needs improvement\n"
            "❌ Below 60: Optimize your resume\n\n"
            "Tips to improve:\n"
            "- Use keywords from job description\n"
            "- Quantify achievements\n"
            "- Keep formatting simple\n"
            "- Add relevant skills",
        ],
        "ats",
    ),
    _entry(
        ["anti-cheat", "proctoring", "test rules"],
        [
            "Our anti-cheat system ensures fair testing:\n\n"
            "📌 Stay in the same browser tab\n"
            "📌 Disable screen sharing tools\n"
            "📌 Keep camera enabled if required\n"
            "📌 Submit within time limit\n\n"
            "⚠️ Tab switching triggers warnings. Multiple violations may invalidate your test.",
        ],
        "anti-cheat",
    ),
    _entry(
        ["deadline", "due date", "last date"],
        [
            "Project deadlines are shown on each project card. You can also:\n"
            "- Filter projects 'Closing Soon' (within 7 days)\n"
            "- Check the Projects page for all deadlines\n"
            "- Enable notifications for deadline reminders\n\n"
            "Plan ahead and apply early!",
        ],
        "deadline",
    ),
    _entry(
        ["team", "team size", "collaborate", "members"],
        [
            "Each project shows:\n"
            "- Maximum team size\n"
            "- Available roles\n"
            "- Filled/open positions\n\n"
            "Once approved, you'll be added to the team and can collaborate with other "
            "members through the project dashboard.",
        ],
        "team",
    ),
    _entry(
        ["status", "application status", "check status"],
        [
            "Track your application status:\n\n"
            "📋 Pending: Under review\n"
            "⭐ Shortlisted: You're on the radar!\n"
            "✅ Approved: Congratulations!\n"
            "❌ Rejected: Keep trying!\n\n"
            "Check Applications page or Notifications for updates.",
        ],
        "status",
    ),
    _entry(
        ["skill", "skills", "add skills", "technology"],
        [
            "Showcase your skills:\n\n"
            "1. Profile page: Add your core skills\n"
            "2. Resume: List technical and soft skills\n"
            "3. Applications: Highlight relevant skills\n"
            "4. Tests: Prove your expertise\n\n"
            "More skills = better project matches!",
        ],
        "skills",
    ),

    # ── Catch-most question words (keep last) ────────────────────────────────
    _entry(
        ["what", "how", "when", "where", "why", "who"],
        [
            "I can help you with:\n"
            "- Applying to projects\n"
            "- Building resumes\n"
            "- Taking skill tests\n"
            "- Earning certificates\n"
            "- Managing profile & settings\n"
            "- Tracking applications\n\n"
            "Just ask me anything specific!",
        ],
        "general",
    ),
)

FALLBACK_RESPONSES: tuple[str, ...] = (
    "I'm not sure I understand. Could you rephrase that?",
    "Hmm, I don't have information on that yet. Try asking about projects, applications, resumes, or tests!",
    "I didn't quite get that. Ask me about:\n"
    "- How to apply\n"
    "- Building resumes\n"
    "- Skill tests\n"
    "- Certificates\n"
    "- Profile settings",
    "That's a great question! For specific help, contact support@projecthub.com or check the Help Center.",
)


# ═══════════════════════════════════════════════════════════════════════════
#  WIDGET
# ═══════════════════════════════════════════════════════════════════════════
WIDGET_GREETING = (
    "👋 Hi! I'm your ProjectHub assistant. "
    "Ask me anything about applications, resumes, tests, or certificates!"
)

# (label, query) pairs offered as buttons under the widget input
QUICK_ACTIONS: tuple[tuple[str, str], ...] = (
    ("How to apply?", "how to apply"),
    ("Build resume",  "build resume"),
    ("Skill tests",   "skill tests"),
    ("Get help",      "help"),
)


# ═══════════════════════════════════════════════════════════════════════════
#  LANDING PAGE SCRIPT
# ═══════════════════════════════════════════════════════════════════════════
NAME_PROMPT = "Hey there! 👋 I'm your friendly ProjectHub assistant. What should I call you?"

NAME_GREETING = "Nice to meet you, {user_name}! 😊 Before we dive into work, let me lighten the mood..."

QUERY_PROMPT = "Feeling better? 😄 Now, how can I help you today? Type 'help' to see what I can do!"

JOKES: tuple[str, ...] = (
    "Why do programmers prefer dark mode? Because light attracts bugs! 🐛😄",
    "Why did the developer go broke? Because they used up all their cache! 💰😂",
    "What's a programmer's favorite hangout place? Foo Bar! 🍻",
    "Why do Java developers wear glasses? Because they can't C#! 😎",
    "How many programmers does it take to change a light bulb? None, that's a hardware problem! 💡",
)

SCRIPTED_TOPICS: tuple[ScriptedTopic, ...] = (
    ScriptedTopic(
        "getting_started",
        ("help", "start", "guide"),
        "Great! Here's how to get started with ProjectHub:\n\n"
        "1️⃣ Click \"Get Started\" to register\n"
        "2️⃣ Fill in your details (student or company)\n"
        "3️⃣ Verify your email\n"
        "4️⃣ Login and explore projects\n"
        "5️⃣ Apply to projects that match your skills\n"
        "6️⃣ Take skill tests and build your resume\n\n"
        "What would you like to know more about?",
    ),
    ScriptedTopic(
        "apply",
        ("project", "apply"),
        "To apply for projects:\n\n"
        "✅ Browse available projects in the Projects section\n"
        "✅ Click on a project to view details\n"
        "✅ Click 'Apply' and fill in your motivation\n"
        "✅ You may need to take a skill test\n"
        "✅ Wait for admin approval\n\n"
        "Need help with anything else?",
    ),
    ScriptedTopic(
        "skill_tests",
        ("test", "skill"),
        "About Skill Tests:\n\n"
        "📝 Tests are role-specific assessments\n"
        "⏱️ Each test has a time limit\n"
        "🎯 You need to provide reasoning for answers\n"
        "👨‍💼 Admins review your reasoning\n"
        "✅ Pass to proceed with your application\n\n"
        "Ready to showcase your skills?",
    ),
    ScriptedTopic(
        "resume",
        ("resume", "cv"),
        "Resume Builder Tips:\n\n"
        "📄 Use our ATS-optimized templates\n"
        "🎯 Mirror keywords from job descriptions\n"
        "💪 Quantify achievements\n"
        "🔧 Keep it updated regularly\n\n"
        "Want to build your resume now?",
    ),
    ScriptedTopic(
        "certificates",
        ("certificate", "blockchain"),
        "Blockchain Certificates:\n\n"
        "🔐 All certificates are blockchain-verified\n"
        "🌐 Immutable and tamper-proof\n"
        "📲 Share via unique link\n"
        "✅ Verifiable by employers\n\n"
        "Complete projects to earn yours!",
    ),
    ScriptedTopic(
        "thanks",
        ("thanks", "thank"),
        "You're welcome, {user_name}! 😊 Feel free to ask me anything anytime. "
        "Good luck with your projects! 🚀",
    ),
    ScriptedTopic(
        "bye",
        ("bye", "exit"),
        "See you later, {user_name}! 👋 Come back if you need anything. Have a productive day! 💪",
    ),
    ScriptedTopic(
        "team",
        ("team", "who"),
        "This awesome platform was created by Team 150! 🎉\n\n"
        "👨‍💻 R Harshith Reddy\n"
        "👨‍💻 Abhishek\n"
        "👨‍💻 Vishwanath\n"
        "👨‍💻 Revanth\n\n"
        "With ❤️ from the COSC team!",
    ),
)

SCRIPTED_FALLBACK = (
    "Hmm, I'm not sure about that, {user_name}. Try asking about:\n\n"
    "• Getting started\n"
    "• Applying to projects\n"
    "• Skill tests\n"
    "• Resume building\n"
    "• Certificates\n"
    "• Our team\n\n"
    "What interests you?"
)
