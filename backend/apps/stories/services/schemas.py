from __future__ import annotations

from typing import Dict, List, TypedDict


class PersonalInfo(TypedDict):
    fullName: str
    dateOfBirth: str
    birthplace: str
    background: str


class SectionContent(TypedDict):
    summary: str
    highlights: List[str]


class _TimelineEventBase(TypedDict):
    id: str
    title: str
    date: str
    description: str


class TimelineEvent(_TimelineEventBase, total=False):
    imageUrl: str
    notes: str


class CustomizationSettings(TypedDict):
    title: str
    subtitle: str
    coverImage: str
    primaryFont: str
    quote: str


class StoryPayload(TypedDict, total=False):
    personal: PersonalInfo
    childhood: SectionContent
    education: SectionContent
    career: SectionContent
    relationships: SectionContent
    challenges: SectionContent
    dreams: SectionContent
    timeline: List[TimelineEvent]
    storyDrafts: Dict[str, str]
    selectedStyle: str
    customization: CustomizationSettings
    lastUpdated: str
    shareableId: str


class SharePayload(TypedDict):
    shareId: str
    storyId: str
    title: str
    draft: str
    paragraphs: List[str]
    createdAt: str
    style: str
    personal: PersonalInfo
    customization: CustomizationSettings
    timeline: List[TimelineEvent]


class DraftResult(TypedDict):
    draft: str
    provider: str
