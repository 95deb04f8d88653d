"""AI coaching conversations, summaries and session analysis."""

import json
import logging
import uuid
from dataclasses import dataclass

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.clock import Clock, utcnow
from app.models.coaching import CoachingSession
from app.models.user import User
from app.services.llm import LLMClient, LLMError
from app.storage import Storage

logger = logging.getLogger("hipo_coach")

HISTORY_WINDOW = 10

COACHES = {
    "leadership": {
        "name": "Samuel",
        "description": "Transform from successful manager to visionary leader",
        "specialties": ["Executive presence", "Strategic thinking", "Team leadership", "Organizational change"],
    },
    "performance": {
        "name": "Rohan",
        "description": "Accelerate your performance to stand out and advance",
        "specialties": ["Productivity optimization", "Goal achievement", "Skill development", "Performance reviews"],
    },
    "career": {
        "name": "Maya",
        "description": "Navigate career transitions and accelerate growth strategically",
        "specialties": ["Career planning", "Job transitions", "Networking", "Salary negotiation"],
    },
    "hipo": {
        "name": "Aria",
        "description": "Strategic career guidance for high-potential professionals",
        "specialties": ["Strategic thinking", "Executive presence", "Leadership pipeline", "High-impact decisions"],
    },
    "life": {
        "name": "Zara",
        "description": "Achieve work-life integration and personal fulfillment",
        "specialties": ["Work-life balance", "Stress management", "Personal goals", "Wellness"],
    },
    "empathear": {
        "name": "Arjun",
        "description": "Your empathetic listening companion for emotional support",
        "specialties": ["Emotional support", "Active listening", "Stress relief", "Mental wellness"],
    },
}

UNCONFIGURED_REPLY = (
    "I apologize, but I'm not properly configured right now. Please contact support to help resolve this issue."
)
UNAVAILABLE_REPLY = "I'm experiencing some technical difficulties right now. Please try again in a moment."
SUMMARY_UNAVAILABLE = "Summary generation temporarily unavailable. Please try again later."

PROFILE_FIELDS = [
    ("Current Role", "current_role"),
    ("Industry", "industry"),
    ("Career Stage", "career_stage"),
    ("Five Year Goal", "five_year_goal"),
    ("Biggest Challenge", "biggest_challenge"),
    ("Work Environment", "work_environment"),
]


class SessionAnalysis(BaseModel):
    """Structured insights extracted from a coaching conversation."""

    keyInsights: list[str] = []
    mainTopics: list[str] = []
    actionItems: list[str] = []
    coachingThemes: list[str] = []
    overallSentiment: str = "neutral"
    progressIndicators: list[str] = []


@dataclass
class ChatTurn:
    """Messages appended by one chat turn and the updated session."""

    user_message: dict
    coach_message: dict
    session: CoachingSession


def new_message(content: str, is_user: bool, now) -> dict:
    """Build a stored chat message."""
    return {
        "id": f"msg_{uuid.uuid4().hex[:16]}",
        "content": content,
        "isUser": is_user,
        "timestamp": now.isoformat(),
    }


def format_transcript(messages: list[dict]) -> str:
    return "\n".join(f"{'User' if m.get('isUser') else 'Coach'}: {m.get('content', '')}" for m in messages)


def build_system_prompt(coach_type: str, history: list[dict], user: User | None) -> str:
    coach = COACHES[coach_type]
    specialties = "\n".join(f"- {s}" for s in coach["specialties"])

    profile = ""
    if user is not None:
        lines = [f"- {label}: {getattr(user, attr) or 'Not specified'}" for label, attr in PROFILE_FIELDS]
        profile = "User Profile:\n" + "\n".join(lines)

    return (
        f"You are {coach['name']}, {coach['description']}.\n\n"
        f"Key coaching areas you focus on:\n{specialties}\n\n"
        "Be warm, practical and culturally sensitive to Indian workplace dynamics. "
        "Keep responses to 2-3 short paragraphs and ask one thoughtful follow-up question when appropriate.\n\n"
        f"{profile}\n\n"
        f"Previous conversation context:\n{format_transcript(history[-HISTORY_WINDOW:])}\n\n"
        f"Stay in character as {coach['name']}."
    )


class CoachingService:
    """Runs chat turns against the LLM and persists the conversation."""

    def __init__(self, storage: Storage, llm: LLMClient, clock: Clock = utcnow) -> None:
        self.storage = storage
        self.llm = llm
        self.clock = clock

    def generate_reply(self, coach_type: str, message: str, history: list[dict], user: User | None) -> str:
        """Ask the coach for a reply. Provider failures become an apology the user can see."""
        if coach_type not in COACHES:
            return "I'm sorry, I couldn't find that coach. Please try again."

        try:
            return self.llm.complete(
                build_system_prompt(coach_type, history, user),
                f"User: {message}",
                max_tokens=500,
                temperature=0.7,
            )
        except LLMError as e:
            logger.error("Error generating %s coach response: %s", coach_type, e)
            return UNAVAILABLE_REPLY if self.llm.is_configured else UNCONFIGURED_REPLY

    def chat(self, session: CoachingSession, user: User, message: str) -> ChatTurn:
        """Run one conversational turn and append both messages to the session."""
        message = message.strip()
        history = list(session.messages or [])
        reply = self.generate_reply(session.coach_type, message, history, user)

        now = self.clock()
        user_message = new_message(message, True, now)
        coach_message = new_message(reply, False, now)
        updated = self.storage.update_coaching_session(session, messages=history + [user_message, coach_message])
        return ChatTurn(user_message=user_message, coach_message=coach_message, session=updated)

    def summarize(self, session: CoachingSession) -> CoachingSession:
        """Generate a short summary and store it on the session."""
        prompt = (
            f"Summarize this coaching conversation between a user and a {session.coach_type} coach. "
            "Cover key insights, main topics, next steps and progress. Keep it under 200 words.\n\n"
            f"Conversation:\n{format_transcript(session.messages or [])}"
        )
        try:
            summary = self.llm.complete("You summarize coaching sessions.", prompt, max_tokens=400, temperature=0.4)
        except LLMError as e:
            logger.error("Error generating conversation summary: %s", e)
            summary = SUMMARY_UNAVAILABLE
        return self.storage.update_coaching_session(session, summary=summary)

    def analyze(self, session: CoachingSession) -> SessionAnalysis:
        """Extract structured insights. Falls back to placeholder content when the model fails."""
        system_prompt = (
            "You are a professional coaching analysis expert. Return valid JSON with the keys "
            "keyInsights, mainTopics, actionItems, coachingThemes (arrays of strings), "
            "overallSentiment (positive/neutral/challenging) and progressIndicators (array of strings)."
        )
        prompt = f"Analyze this {session.coach_type} coaching conversation:\n\n{format_transcript(session.messages or [])}"
        try:
            raw = self.llm.complete(system_prompt, prompt, max_tokens=800, temperature=0.3, json_mode=True)
            return SessionAnalysis.model_validate(json.loads(raw))
        except (LLMError, json.JSONDecodeError, PydanticValidationError) as e:
            logger.error("Error generating detailed analysis: %s", e)
            return SessionAnalysis(
                keyInsights=["Conversation analysis temporarily unavailable"],
                mainTopics=["Please try again later"],
                actionItems=["Contact support if issue persists"],
                coachingThemes=[session.coach_type],
                overallSentiment="neutral",
                progressIndicators=["Analysis pending"],
            )
