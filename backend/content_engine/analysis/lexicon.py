"""
Shared lookup tables for the context and writing-style analyzers.

Both analyzers read from these tables so their keyword, topic and phrase
heuristics stay in step. Bump LEXICON_VERSION whenever an entry changes:
stored analyses are only comparable when produced by the same version.
"""

from types import MappingProxyType

LEXICON_VERSION = "1.0"

STOP_WORDS = frozenset({
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
    "from", "up", "about", "into", "through", "during", "before", "after", "above",
    "below", "between", "among", "this", "that", "these", "those", "i", "me", "my",
    "myself", "we", "our", "ours", "ourselves", "you", "your", "yours", "yourself",
    "yourselves", "he", "him", "his", "himself", "she", "her", "hers", "herself",
    "it", "its", "itself", "they", "them", "their", "theirs", "themselves", "what",
    "which", "who", "whom", "am", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "having", "do", "does", "did", "doing", "a", "an", "as",
    "able", "also", "can", "could", "should", "would", "will", "shall", "may",
    "might", "must",
})

PROFESSIONAL_TERMS = MappingProxyType({
    "technology": (
        "software", "development", "programming", "coding", "javascript", "python", "react",
        "nodejs", "database", "api", "frontend", "backend", "fullstack", "devops", "cloud",
        "aws", "azure", "docker", "kubernetes", "microservices", "agile", "scrum",
    ),
    "business": (
        "management", "leadership", "strategy", "marketing", "sales", "business", "entrepreneur",
        "startup", "innovation", "growth", "revenue", "profit", "roi", "kpi", "analytics",
        "consulting", "operations", "finance", "accounting", "hr", "recruitment",
    ),
    "design": (
        "design", "ux", "ui", "user experience", "user interface", "figma", "sketch",
        "photoshop", "illustrator", "branding", "visual", "creative", "typography",
    ),
    "data": (
        "data", "analytics", "machine learning", "ai", "artificial intelligence",
        "statistics", "visualization", "tableau", "sql", "excel", "reporting",
    ),
})

INDUSTRY_KEYWORDS = MappingProxyType({
    "Technology": ("tech", "software", "programming", "development", "coding", "startup", "saas"),
    "Finance": ("finance", "banking", "investment", "trading", "fintech", "accounting"),
    "Healthcare": ("healthcare", "medical", "health", "hospital", "pharmaceutical", "biotech"),
    "Education": ("education", "teaching", "learning", "university", "school", "training"),
    "Marketing": ("marketing", "advertising", "branding", "social media", "content", "seo"),
    "Consulting": ("consulting", "advisory", "strategy", "management", "business"),
    "Design": ("design", "creative", "ux", "ui", "visual", "graphic"),
    "Sales": ("sales", "business development", "account management", "revenue"),
    "Operations": ("operations", "logistics", "supply chain", "manufacturing"),
    "HR": ("human resources", "recruitment", "talent", "people", "culture"),
})

TOPIC_KEYWORDS = MappingProxyType({
    "Leadership": ("lead", "manage", "team", "leadership", "management"),
    "Innovation": ("innovation", "creative", "new", "innovative", "breakthrough"),
    "Growth": ("growth", "scale", "expand", "increase", "develop"),
    "Strategy": ("strategy", "strategic", "plan", "planning", "vision"),
    "Technology": ("technology", "tech", "digital", "software", "system"),
    "Communication": ("communication", "presentation", "speaking", "writing"),
    "Problem Solving": ("problem", "solution", "solve", "challenge", "issue"),
    "Collaboration": ("collaboration", "team", "work", "together", "partnership"),
})

# Focus areas reported as missing by context insights
INSIGHT_FOCUS_AREAS = ("Leadership", "Strategy", "Innovation", "Communication", "Problem Solving")

POSITIVE_WORDS = (
    "good", "great", "excellent", "amazing", "wonderful", "fantastic", "awesome",
    "love", "like", "enjoy", "happy", "excited", "passionate", "successful",
    "achieve", "accomplish", "win", "best", "better", "improve", "growth",
)

NEGATIVE_WORDS = (
    "bad", "terrible", "awful", "hate", "dislike", "sad", "angry", "frustrated",
    "difficult", "challenge", "problem", "issue", "fail", "failure", "worst",
    "worse", "decline", "decrease", "loss",
)

# Iteration order is the tie-break order for the dominant tone
TONE_INDICATORS = MappingProxyType({
    "professional": ("expertise", "experience", "industry", "business", "strategy", "professional", "corporate"),
    "friendly": ("thanks", "appreciate", "love", "enjoy", "excited", "happy", "wonderful"),
    "authoritative": ("must", "should", "need to", "important", "critical", "essential", "required"),
    "conversational": ("you know", "i think", "personally", "in my opinion", "let me", "what do you"),
    "inspirational": ("achieve", "success", "dream", "inspire", "motivate", "believe", "possible"),
})

FORMAL_INDICATORS = ("furthermore", "therefore", "consequently", "nevertheless", "moreover")

# Matched as whole words: "ok" must not hit "book"
CASUAL_INDICATORS = ("gonna", "wanna", "yeah", "ok", "cool", "awesome")

TECHNICAL_TERMS = ("algorithm", "framework", "methodology", "implementation", "optimization")

TRANSITION_WORDS = ("however", "therefore", "moreover", "furthermore", "additionally", "consequently")

CALL_TO_ACTION_PHRASES = ("learn more", "get started", "contact me", "let's connect", "reach out")

EXPERTISE_WORDS = ("expert", "specialist", "experienced", "skilled", "proficient")

PERSPECTIVE_PHRASES = ("i believe", "in my opinion", "my experience", "i think")

PERSONALITY_TRAITS = MappingProxyType({
    "authentic": ("genuine", "real", "honest", "transparent"),
    "innovative": ("innovative", "creative", "new", "cutting-edge"),
    "reliable": ("consistent", "dependable", "trust", "reliable"),
    "passionate": ("passionate", "love", "excited", "enthusiastic"),
    "analytical": ("data", "analysis", "research", "evidence"),
})

NARRATIVE_STYLE_WORDS = ("story", "experience")
ANALYTICAL_STYLE_WORDS = ("data", "research")

STORYTELLING_PATTERN = r"\b(once|story|experience|remember|happened)\b"
PERSONAL_PATTERN = r"\b(i|my|me|personally)\b"
DATA_PATTERN = r"\b\d+(?:[.,]\d+)?\s*(?:%|(?:percent|million|billion|thousand)\b)"
CONTRACTION_PATTERN = r"\b\w+'\w+\b"


def all_professional_terms():
    """Flattened professional vocabulary in table order, without duplicates"""
    seen = []
    for terms in PROFESSIONAL_TERMS.values():
        for term in terms:
            if term not in seen:
                seen.append(term)
    return tuple(seen)
