# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Catalog of the XMP properties xmpreader extracts.

Maps namespace URI -> local name -> :class:`PropertyDescriptor`. Anything not
listed here is ignored by the reader. Groups follow the Metadata Working Group
guidance: ``special`` properties steer extraction or need post-processing,
``deprecated`` ones have a preferred replacement elsewhere.
"""

from ._types import Check, Group, PropertyDescriptor, Shape

NAMESPACES = {
    "exif": "http://ns.adobe.com/exif/1.0/",
    "tiff": "http://ns.adobe.com/tiff/1.0/",
    "aux": "http://ns.adobe.com/exif/1.0/aux/",
    "dc": "http://purl.org/dc/elements/1.1/",
    "xmp": "http://ns.adobe.com/xap/1.0/",
    "xmpRights": "http://ns.adobe.com/xap/1.0/rights/",
    "xmpMM": "http://ns.adobe.com/xap/1.0/mm/",
    "cc": "http://creativecommons.org/ns#",
    "xmpNote": "http://ns.adobe.com/xmp/note/",
    "photoshop": "http://ns.adobe.com/photoshop/1.0/",
    "Iptc4xmpCore": "http://iptc.org/std/Iptc4xmpCore/1.0/xmlns/",
    "Iptc4xmpExt": "http://iptc.org/std/Iptc4xmpExt/2008-02-29/",
    "GPano": "http://ns.google.com/photos/1.0/panorama/",
}

_EXIF = NAMESPACES["exif"]
_TIFF = NAMESPACES["tiff"]
_AUX = NAMESPACES["aux"]
_DC = NAMESPACES["dc"]
_XMP = NAMESPACES["xmp"]
_XMPRIGHTS = NAMESPACES["xmpRights"]
_XMPMM = NAMESPACES["xmpMM"]
_CC = NAMESPACES["cc"]
_XMPNOTE = NAMESPACES["xmpNote"]
_PHOTOSHOP = NAMESPACES["photoshop"]
_IPTC_CORE = NAMESPACES["Iptc4xmpCore"]
_IPTC_EXT = NAMESPACES["Iptc4xmpExt"]
_GPANO = NAMESPACES["GPano"]


def _exif(shape: Shape = Shape.SIMPLE, **kwargs) -> PropertyDescriptor:
    return PropertyDescriptor(Group.EXIF, shape, **kwargs)


def _general(shape: Shape = Shape.SIMPLE, **kwargs) -> PropertyDescriptor:
    return PropertyDescriptor(Group.GENERAL, shape, **kwargs)


def _deprecated(shape: Shape = Shape.SIMPLE, **kwargs) -> PropertyDescriptor:
    return PropertyDescriptor(Group.DEPRECATED, shape, **kwargs)


def _special(shape: Shape = Shape.SIMPLE, **kwargs) -> PropertyDescriptor:
    return PropertyDescriptor(Group.SPECIAL, shape, **kwargs)


def _choices(*values: str) -> frozenset[str]:
    return frozenset(values)


_RATIONAL = {"check": Check.RATIONAL}
_INTEGER = {"check": Check.INTEGER}
_DATE = {"check": Check.DATE}
_BOOLEAN = {"check": Check.BOOLEAN}
_GPS = {"check": Check.GPS}

_LOCATION_MEMBERS = _choices(
    "WorldRegion",
    "CountryCode",
    "CountryName",
    "ProvinceState",
    "City",
    "Sublocation",
)

PROPERTIES: dict[str, dict[str, PropertyDescriptor]] = {
    _EXIF: {
        "ApertureValue": _exif(**_RATIONAL),
        "BrightnessValue": _exif(**_RATIONAL),
        "CompressedBitsPerPixel": _exif(**_RATIONAL),
        "DigitalZoomRatio": _exif(**_RATIONAL),
        "ExposureBiasValue": _exif(**_RATIONAL),
        "ExposureIndex": _exif(**_RATIONAL),
        "ExposureTime": _exif(**_RATIONAL),
        "FlashEnergy": _exif(**_RATIONAL),
        "FNumber": _exif(**_RATIONAL),
        "FocalLength": _exif(**_RATIONAL),
        "FocalPlaneXResolution": _exif(**_RATIONAL),
        "FocalPlaneYResolution": _exif(**_RATIONAL),
        "GPSAltitude": _exif(**_RATIONAL),
        "GPSDestBearing": _exif(**_RATIONAL),
        "GPSDestDistance": _exif(**_RATIONAL),
        "GPSDOP": _exif(**_RATIONAL),
        "GPSImgDirection": _exif(**_RATIONAL),
        "GPSSpeed": _exif(**_RATIONAL),
        "GPSTrack": _exif(**_RATIONAL),
        "MaxApertureValue": _exif(**_RATIONAL),
        "ShutterSpeedValue": _exif(**_RATIONAL),
        "SubjectDistance": _exif(**_RATIONAL),
        # Flash struct and its members
        "Flash": _exif(
            Shape.STRUCT,
            check=Check.FLASH,
            children=_choices("Fired", "Function", "Mode", "RedEyeMode", "Return"),
        ),
        "Fired": _exif(struct_part=True, **_BOOLEAN),
        "Function": _exif(struct_part=True, **_BOOLEAN),
        "Mode": _exif(
            check=Check.CLOSED, choices=_choices("0", "1", "2", "3"), struct_part=True
        ),
        "Return": _exif(
            check=Check.CLOSED, choices=_choices("0", "2", "3"), struct_part=True
        ),
        "RedEyeMode": _exif(struct_part=True, **_BOOLEAN),
        "ISOSpeedRatings": _exif(Shape.SEQ, **_INTEGER),
        "ColorSpace": _exif(check=Check.CLOSED, choices=_choices("1", "65535")),
        "ComponentsConfiguration": _exif(
            Shape.SEQ,
            check=Check.CLOSED,
            choices=_choices("1", "2", "3", "4", "5", "6"),
        ),
        "Contrast": _exif(check=Check.CLOSED, choices=_choices("0", "1", "2")),
        "CustomRendered": _exif(check=Check.CLOSED, choices=_choices("0", "1")),
        "DateTimeOriginal": _exif(**_DATE),
        # xmp:CreateDate is the preferred form
        "DateTimeDigitized": _exif(**_DATE),
        "ExifVersion": _exif(),
        "ExposureMode": _exif(check=Check.CLOSED, range_low=0, range_high=2),
        "ExposureProgram": _exif(check=Check.CLOSED, range_low=0, range_high=8),
        "FileSource": _exif(check=Check.CLOSED, choices=_choices("3")),
        "FlashpixVersion": _exif(),
        "FocalLengthIn35mmFilm": _exif(**_INTEGER),
        "FocalPlaneResolutionUnit": _exif(
            check=Check.CLOSED, choices=_choices("2", "3")
        ),
        "GainControl": _exif(check=Check.CLOSED, range_low=0, range_high=4),
        # Folded into GPSAltitude when results are read
        "GPSAltitudeRef": _exif(check=Check.CLOSED, choices=_choices("0", "1")),
        "GPSAreaInformation": _exif(),
        "GPSDestBearingRef": _exif(check=Check.CLOSED, choices=_choices("T", "M")),
        "GPSDestDistanceRef": _exif(
            check=Check.CLOSED, choices=_choices("K", "M", "N")
        ),
        "GPSDestLatitude": _exif(**_GPS),
        "GPSDestLongitude": _exif(**_GPS),
        "GPSDifferential": _exif(check=Check.CLOSED, choices=_choices("0", "1")),
        "GPSImgDirectionRef": _exif(check=Check.CLOSED, choices=_choices("T", "M")),
        "GPSLatitude": _exif(**_GPS),
        "GPSLongitude": _exif(**_GPS),
        "GPSMapDatum": _exif(),
        "GPSMeasureMode": _exif(check=Check.CLOSED, choices=_choices("2", "3")),
        "GPSProcessingMethod": _exif(),
        "GPSSatellites": _exif(),
        "GPSSpeedRef": _exif(check=Check.CLOSED, choices=_choices("K", "M", "N")),
        "GPSStatus": _exif(check=Check.CLOSED, choices=_choices("A", "V")),
        # Unlike EXIF, the XMP form carries the time as well as the date
        "GPSTimeStamp": _exif(name="GPSDateStamp", **_DATE),
        "GPSTrackRef": _exif(check=Check.CLOSED, choices=_choices("T", "M")),
        "GPSVersionID": _exif(),
        "ImageUniqueID": _exif(),
        # Not contiguous, so no range
        "LightSource": _exif(
            check=Check.CLOSED,
            choices=_choices(
                "0", "1", "2", "3", "4", "9", "10", "11", "12", "13", "14",
                "15", "17", "18", "19", "20", "21", "22", "23", "24", "255",
            ),
        ),
        "MeteringMode": _exif(
            check=Check.CLOSED, range_low=0, range_high=6, choices=_choices("255")
        ),
        "PixelXDimension": _exif(**_INTEGER),
        "PixelYDimension": _exif(**_INTEGER),
        "Saturation": _exif(check=Check.CLOSED, range_low=0, range_high=2),
        "SceneCaptureType": _exif(check=Check.CLOSED, range_low=0, range_high=3),
        "SceneType": _exif(check=Check.CLOSED, choices=_choices("1")),
        # 6 is not a valid SensingMethod
        "SensingMethod": _exif(
            check=Check.CLOSED, range_low=1, range_high=5, choices=_choices("7", "8")
        ),
        "Sharpness": _exif(check=Check.CLOSED, range_low=0, range_high=2),
        "SpectralSensitivity": _exif(),
        "SubjectArea": _exif(Shape.SEQ, **_INTEGER),
        "SubjectDistanceRange": _exif(check=Check.CLOSED, range_low=0, range_high=3),
        "SubjectLocation": _exif(Shape.SEQ, **_INTEGER),
        "UserComment": _exif(Shape.LANG),
        "WhiteBalance": _exif(check=Check.CLOSED, choices=_choices("0", "1")),
    },
    # tiff:Orientation is not extracted since it interferes with automatic
    # rotation, and tiff:YCbCrSubSampling is too often written as plain text.
    _TIFF: {
        "Artist": _exif(),
        "BitsPerSample": _exif(Shape.SEQ, **_INTEGER),
        "Compression": _exif(check=Check.CLOSED, choices=_choices("1", "6")),
        # dc:rights is the proper property
        "Copyright": _exif(Shape.LANG),
        # xmp:ModifyDate is the proper property
        "DateTime": _exif(**_DATE),
        # dc:description is the proper property
        "ImageDescription": _exif(Shape.LANG),
        "ImageLength": _exif(**_INTEGER),
        "ImageWidth": _exif(**_INTEGER),
        "Make": _exif(),
        "Model": _exif(),
        "PhotometricInterpretation": _exif(
            check=Check.CLOSED, choices=_choices("2", "6")
        ),
        "PlanarConfiguration": _exif(check=Check.CLOSED, choices=_choices("1", "2")),
        "PrimaryChromaticities": _exif(Shape.SEQ, **_RATIONAL),
        "ReferenceBlackWhite": _exif(Shape.SEQ, **_RATIONAL),
        "ResolutionUnit": _exif(check=Check.CLOSED, choices=_choices("2", "3")),
        "SamplesPerPixel": _exif(**_INTEGER),
        # see xmp:CreatorTool
        "Software": _exif(),
        "WhitePoint": _exif(Shape.SEQ, **_RATIONAL),
        "XResolution": _exif(**_RATIONAL),
        "YResolution": _exif(**_RATIONAL),
        "YCbCrCoefficients": _exif(Shape.SEQ, **_RATIONAL),
        "YCbCrPositioning": _exif(check=Check.CLOSED, choices=_choices("1", "2")),
    },
    _AUX: {
        "Lens": _exif(),
        "SerialNumber": _exif(),
        "OwnerName": _exif(name="CameraOwnerName"),
    },
    # dc:format is not extracted; the MIME type is known better elsewhere.
    _DC: {
        "title": _general(Shape.LANG, name="ObjectName"),
        "description": _general(Shape.LANG, name="ImageDescription"),
        "contributor": _general(Shape.BAG, name="dc-contributor"),
        "coverage": _general(name="dc-coverage"),
        # exif Artist, iptc By-line (2:80)
        "creator": _general(Shape.SEQ, name="Artist"),
        # Lifecycle date, deliberately kept apart from the other dates
        "date": _general(Shape.SEQ, name="dc-date", **_DATE),
        "identifier": _deprecated(name="Identifier"),
        # iptc 2:135
        "language": _general(Shape.BAG, name="LanguageCode", check=Check.LANG_CODE),
        "publisher": _general(Shape.BAG, name="dc-publisher"),
        "relation": _general(Shape.BAG, name="dc-relation"),
        "rights": _general(Shape.LANG, name="Copyright"),
        # The image this one is derived from, not the iptc Source
        "source": _general(name="dc-source"),
        # iptc 2:25
        "subject": _general(Shape.BAG, name="Keywords"),
        "type": _general(Shape.BAG, name="dc-type"),
    },
    _XMP: {
        "CreateDate": _general(name="DateTimeDigitized", **_DATE),
        "CreatorTool": _general(name="Software"),
        "Identifier": _general(Shape.BAG),
        "Label": _general(),
        "ModifyDate": _general(name="DateTime", **_DATE),
        "MetadataDate": _general(name="DateTimeMetadata", **_DATE),
        "Nickname": _general(),
        "Rating": _general(check=Check.RATING),
    },
    _XMPRIGHTS: {
        "Certificate": _general(name="RightsCertificate"),
        "Marked": _general(name="Copyrighted", **_BOOLEAN),
        "Owner": _general(Shape.BAG, name="CopyrightOwner"),
        "UsageTerms": _general(Shape.LANG),
        "WebStatement": _general(),
    },
    # xmpMM:DerivedFrom and friends mostly carry local file paths.
    _XMPMM: {
        "OriginalDocumentID": _general(),
    },
    _CC: {
        "license": _general(name="LicenseUrl"),
        "morePermissions": _general(name="MorePermissionsUrl"),
        "attributionURL": _general(name="AttributionUrl"),
        "attributionName": _general(name="PreferredAttributionName"),
    },
    # Announces an Extended XMP payload; value is the payload GUID.
    _XMPNOTE: {
        "HasExtendedXMP": _special(),
    },
    # Legacy IPTC properties are deprecated when a replacement exists.
    _PHOTOSHOP: {
        "City": _deprecated(name="CityDest"),
        "Country": _deprecated(name="CountryDest"),
        "State": _deprecated(name="ProvinceOrStateDest"),
        # An XMP date, not an IPTC one
        "DateCreated": _deprecated(name="DateTimeOriginal", **_DATE),
        "CaptionWriter": _general(name="Writer"),
        "Instructions": _general(name="SpecialInstructions"),
        "TransmissionReference": _general(name="OriginalTransmissionRef"),
        # iptc 2:85 By-line Title; merged into the first creator
        "AuthorsPosition": _special(),
        "Credit": _general(),
        "Source": _general(),
        "Urgency": _general(),
        "Category": _general(name="iimCategory"),
        "SupplementalCategories": _general(Shape.BAG, name="iimSupplementalCategory"),
        "Headline": _general(),
    },
    _IPTC_CORE: {
        "CountryCode": _deprecated(name="CountryCodeDest"),
        "IntellectualGenre": _general(),
        # Six digit codes from http://cv.iptc.org/newscodes/scene/
        "Scene": _general(Shape.BAG, name="SceneCode", **_INTEGER),
        # Eight ascii digits; the integer check lets leading zeros through
        "SubjectCode": _general(Shape.BAG, name="SubjectNewsCode", **_INTEGER),
        "Location": _deprecated(name="SublocationDest"),
        # Maps to iim 2:118, although that one is free text
        "CreatorContactInfo": _general(
            Shape.STRUCT,
            name="Contact",
            children=_choices(
                "CiAdrExtadr",
                "CiAdrCity",
                "CiAdrCtry",
                "CiEmailWork",
                "CiTelWork",
                "CiAdrPcode",
                "CiAdrRegion",
                "CiUrlWork",
            ),
        ),
        "CiAdrExtadr": _general(struct_part=True),
        "CiAdrCity": _general(struct_part=True),
        "CiAdrCtry": _general(struct_part=True),
        "CiEmailWork": _general(struct_part=True),
        "CiTelWork": _general(struct_part=True),
        "CiAdrPcode": _general(struct_part=True),
        "CiAdrRegion": _general(struct_part=True),
        "CiUrlWork": _general(struct_part=True),
    },
    _IPTC_EXT: {
        "Event": _general(),
        "OrganisationInImageName": _general(Shape.BAG, name="OrganisationInImage"),
        "PersonInImage": _general(Shape.BAG),
        "MaxAvailHeight": _general(name="OriginalImageHeight", **_INTEGER),
        "MaxAvailWidth": _general(name="OriginalImageWidth", **_INTEGER),
        # Hierarchical; flattened next to the legacy location fields on read
        "LocationShown": _special(Shape.BAGSTRUCT, children=_LOCATION_MEMBERS),
        "LocationCreated": _special(Shape.BAGSTRUCT, children=_LOCATION_MEMBERS),
        "WorldRegion": _special(struct_part=True),
        "CountryCode": _special(struct_part=True),
        "CountryName": _special(name="Country", struct_part=True),
        "ProvinceState": _special(name="ProvinceOrState", struct_part=True),
        "City": _special(struct_part=True),
        "Sublocation": _special(struct_part=True),
    },
    # https://developers.google.com/streetview/spherical-metadata
    _GPANO: {
        "UsePanoramaViewer": _general(**_BOOLEAN),
        "CaptureSoftware": _general(),
        "StitchingSoftware": _general(),
        "ProjectionType": _general(
            check=Check.CLOSED, choices=_choices("equirectangular")
        ),
        "PoseHeadingDegrees": _general(check=Check.REAL, range_low=0, range_high=360),
        "PosePitchDegrees": _general(check=Check.REAL, range_low=-90, range_high=90),
        "PoseRollDegrees": _general(check=Check.REAL, range_low=-180, range_high=180),
        "InitialViewHeadingDegrees": _general(**_INTEGER),
        "InitialViewRollDegrees": _general(**_INTEGER),
        "InitialHorizontalFOVDegrees": _general(
            check=Check.REAL, range_low=0, range_high=360
        ),
        "InitialVerticalFOVDegrees": _general(
            check=Check.REAL, range_low=0, range_high=360
        ),
        "FirstPhotoDate": _general(**_DATE),
        "LastPhotoDate": _general(**_DATE),
        "SourcePhotosCount": _general(**_INTEGER),
        "ExposureLockUsed": _general(**_BOOLEAN),
        "CroppedAreaImageWidthPixels": _general(**_INTEGER),
        "CroppedAreaImageHeightPixels": _general(**_INTEGER),
        "FullPanoWidthPixels": _general(**_INTEGER),
        "FullPanoHeightPixels": _general(**_INTEGER),
        "CroppedAreaLeftPixels": _general(**_INTEGER),
        "CroppedAreaTopPixels": _general(**_INTEGER),
        "InitialCameraDolly": _general(check=Check.REAL, range_low=-1, range_high=1),
    },
}
